from flask import g, jsonify
from sitebuilder.application.leads.submit_contact import list_leads
from sitebuilder.normalizers.lead import normalize_lead
from sitebuilder.utils.decorators import owner_required
from . import v1_bp


@v1_bp.route("/sites/<site_id>/leads", methods=["GET"])
@owner_required
def get_leads(site_id):
    leads = list_leads(owner_id=g.current_user.id, site_id=site_id)
    return jsonify({"items": [normalize_lead(lead) for lead in leads]}), 200
