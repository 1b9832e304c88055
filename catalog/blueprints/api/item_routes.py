from ...services import item_service
from ...utils.api_responses import APIResponse
from . import api_bp


@api_bp.route('/inventories/<inventory_id>/items', methods=['POST'])
async def create_item(inventory_id):
    data = APIResponse.handle_request_content()
    item = await item_service.create_item(inventory_id, name=data.get('name'))
    return APIResponse.success(item.to_dict(), message="Item created", status_code=201)


@api_bp.route('/items/<item_id>', methods=['PUT'])
async def update_item(item_id):
    data = APIResponse.handle_request_content()
    try:
        version = int(data.get('version'))
    except (TypeError, ValueError):
        return APIResponse.validation_error({'version': ['An integer version is required.']})

    custom_id = data.get('custom_id')
    if custom_id is not None and not isinstance(custom_id, str):
        return APIResponse.validation_error({'custom_id': ['Must be a string.']})

    item = await item_service.update_item(
        item_id,
        version=version,
        custom_id=custom_id,
        name=data.get('name'),
    )
    return APIResponse.success(item.to_dict(), message="Item updated")
