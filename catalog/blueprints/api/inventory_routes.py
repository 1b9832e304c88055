import logging

from ...services.custom_id import CustomIdGenerator
from ...services.inventory_service import InventoryService
from ...utils.api_responses import APIResponse
from . import api_bp

logger = logging.getLogger(__name__)


@api_bp.route('/inventories', methods=['POST'])
def create_inventory():
    data = APIResponse.handle_request_content()
    title = (data.get('title') or '').strip()
    if not title:
        return APIResponse.validation_error({'title': ['Title is required.']})

    inventory = InventoryService.create_inventory(
        title,
        description=data.get('description'),
        custom_id_format=data.get('custom_id_format'),
    )
    return APIResponse.success(inventory.to_dict(), message="Inventory created", status_code=201)


@api_bp.route('/inventories/<inventory_id>', methods=['GET'])
def get_inventory(inventory_id):
    inventory = InventoryService.get_inventory(inventory_id)
    return APIResponse.success(inventory.to_dict())


@api_bp.route('/inventories/<inventory_id>/custom-id-format', methods=['GET'])
async def get_custom_id_format(inventory_id):
    """Stored format plus the validation pattern derived from it"""
    generator = CustomIdGenerator.from_app()
    template = await generator.load_template(inventory_id)
    return APIResponse.success({
        'configured': template is not None,
        'custom_id_format': template.to_document() if template is not None else None,
        'pattern': generator.build_pattern(template) if template is not None else None,
    })


@api_bp.route('/inventories/<inventory_id>/custom-id-format', methods=['PUT'])
def update_custom_id_format(inventory_id):
    data = APIResponse.handle_request_content()
    if 'custom_id_format' not in data:
        return APIResponse.validation_error({'custom_id_format': ['This field is required (null clears it).']})

    inventory = InventoryService.update_custom_id_format(inventory_id, data.get('custom_id_format'))
    return APIResponse.success(inventory.to_dict(), message="Custom ID format updated")


@api_bp.route('/inventories/<inventory_id>/custom-id/preview', methods=['POST'])
async def preview_custom_id(inventory_id):
    """Generate an identifier without creating an item"""
    generator = CustomIdGenerator.from_app()
    custom_id = await generator.generate(inventory_id)
    return APIResponse.success({'custom_id': custom_id})


@api_bp.route('/inventories/<inventory_id>/custom-id/validate', methods=['POST'])
async def validate_custom_id(inventory_id):
    data = APIResponse.handle_request_content()
    candidate = data.get('custom_id')
    if candidate is not None and not isinstance(candidate, str):
        return APIResponse.validation_error({'custom_id': ['Must be a string.']})

    generator = CustomIdGenerator.from_app()
    valid = await generator.validate(candidate, inventory_id, excluded_item_id=data.get('item_id'))
    return APIResponse.success({'custom_id': candidate, 'valid': valid})
