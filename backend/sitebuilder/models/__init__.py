# Import every model so that relationships resolve and metadata is complete
from .user import User
from .site import Site
from .section import Section
from .blog_post import BlogPost
from .contact_submission import ContactSubmission
from .audit_log import AuditLog

__all__ = ["User", "Site", "Section", "BlogPost", "ContactSubmission", "AuditLog"]
