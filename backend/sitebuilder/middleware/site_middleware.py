from flask import current_app, g, request
from sitebuilder.models.site import Site


def site_middleware(app):
    @app.before_request
    def load_custom_domain_site():
        """
        Attach the published site whose custom domain matches the Host header.

        Platform hosts (ROOT_DOMAINS) never resolve; g.current_site stays None.
        """
        g.current_site = None

        host = (request.host or "").split(":", 1)[0].strip().lower()
        if not host or host in current_app.config["ROOT_DOMAINS"]:
            return

        g.current_site = Site.query.filter_by(custom_domain=host, is_published=True).first()
