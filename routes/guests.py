from flask import Blueprint, current_app, request
from flask_login import login_required, current_user
from models import db
from services.audit_service import log_groups_imported
from services.tenant_service import org_admin_required
from services.vcard import ImportContext, import_vcf, validate_vcf

guests_bp = Blueprint('guests', __name__, url_prefix='/groups')

VCF_MIME_TYPES = ('text/vcard', 'text/x-vcard', 'text/plain', 'text/directory')


@guests_bp.route('/import-vcf', methods=['POST'])
@login_required
@org_admin_required
def import_vcf_file():
    """Upload a VCF file and create one group per contact card."""
    if 'file' not in request.files:
        return {'status': 'error', 'message': 'No file uploaded'}, 400

    file = request.files['file']
    if file.filename == '':
        return {'status': 'error', 'message': 'No file selected'}, 400

    if file.mimetype not in VCF_MIME_TYPES and not file.filename.lower().endswith('.vcf'):
        return {'status': 'error', 'message': 'Invalid file type. Please upload a VCF file (.vcf)'}, 400

    max_size = current_app.config['VCF_MAX_FILE_SIZE']
    raw = file.stream.read(max_size + 1)
    if len(raw) > max_size:
        return {
            'status': 'error',
            'message': f'File size exceeds maximum allowed size of {max_size // (1024 * 1024)}MB'
        }, 400

    vcf_content = raw.decode('utf-8-sig', errors='replace')

    validation_error = validate_vcf(vcf_content)
    if validation_error:
        return {'status': 'error', 'message': validation_error}, 400

    organization = current_user.organization
    context = ImportContext(
        organization_id=organization.id,
        operator_id=current_user.id,
        operator_name=current_user.full_name,
        default_language=organization.default_language or current_app.config['DEFAULT_LANGUAGE'],
        country=organization.default_country,
    )

    try:
        result = import_vcf(vcf_content, context)
    except Exception as e:
        current_app.logger.exception(f"VCF import error for organization {organization.id}")
        return {
            'status': 'error',
            'message': 'Failed to import VCF file',
            'details': str(e)
        }, 500

    if not result.success:
        return {'status': 'error', **result.to_dict()}, 400

    try:
        log_groups_imported(organization.id, result, actor_id=current_user.id)
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Failed to record audit event for VCF import: {e}")

    status = 'partial_success' if result.errors else 'success'
    return {'status': status, **result.to_dict()}, 200
