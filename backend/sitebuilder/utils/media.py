import os
import uuid
from flask import current_app
from werkzeug.security import safe_join
from sitebuilder.domain.errors import ContentValidationError, FieldError

# Raster formats only, no SVG
ALLOWED_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp', 'ico'}

def allowed_file(filename):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS

def read_image_upload(file, max_bytes):
    """
    Validates an uploaded image before it goes to the blob store.
    Returns the file bytes.
    """
    if not file or not file.filename:
        raise ContentValidationError([FieldError("file", "No file uploaded")])

    if not (file.mimetype or "").startswith("image/"):
        raise ContentValidationError([FieldError("file", "Only image files can be uploaded")])

    if not allowed_file(file.filename):
        raise ContentValidationError([FieldError("file", "File type not allowed")])

    data = file.stream.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise ContentValidationError(
            [FieldError("file", f"File exceeds the {max_bytes // (1024 * 1024)}MB limit")]
        )
    return data

def upload_root():
    upload_folder = current_app.config.get('UPLOAD_FOLDER', 'uploads')
    if not os.path.isabs(upload_folder):
        upload_folder = os.path.join(current_app.instance_path, upload_folder)
    return upload_folder

def save_file(data, path):
    """
    Blob store boundary: writes bytes under UPLOAD_FOLDER and returns the public URL.
    """
    file_path = os.path.join(upload_root(), path)
    os.makedirs(os.path.dirname(file_path), exist_ok=True)

    with open(file_path, "wb") as fh:
        fh.write(data)

    prefix = current_app.config.get('PUBLIC_UPLOAD_PREFIX', '/uploads').rstrip('/')
    return f"{prefix}/{path}"

def save_image(file, site_id):
    data = read_image_upload(file, current_app.config["MAX_UPLOAD_BYTES"])

    ext = file.filename.rsplit('.', 1)[1].lower()
    return save_file(data, f"{site_id}/{uuid.uuid4().hex}.{ext}")

def delete_file(file_url):
    """
    Deletes a file given its public URL.
    """
    prefix = current_app.config.get('PUBLIC_UPLOAD_PREFIX', '/uploads').rstrip('/') + '/'
    if not file_url or not file_url.startswith(prefix):
        return False

    file_path = safe_join(upload_root(), file_url[len(prefix):])

    if file_path and os.path.isfile(file_path):
        try:
            os.remove(file_path)
            return True
        except OSError as e:
            current_app.logger.error(f"Failed to delete file {file_path}: {e}")
            return False
    return False
