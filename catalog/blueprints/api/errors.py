import logging

from ...services.custom_id import CorruptTemplate, CustomIdConflict, InventoryNotFound, UnknownElementKind
from ...services.item_service import InvalidCustomId, ItemNotFound, ItemVersionConflict
from ...utils.api_responses import APIResponse
from . import api_bp

logger = logging.getLogger(__name__)


@api_bp.errorhandler(InventoryNotFound)
def _inventory_not_found(error):
    return APIResponse.not_found("Inventory")


@api_bp.errorhandler(ItemNotFound)
def _item_not_found(error):
    return APIResponse.not_found("Item")


@api_bp.errorhandler(CorruptTemplate)
def _corrupt_template(error):
    return APIResponse.validation_error({'custom_id_format': [str(error)]}, message="Invalid custom ID format")


@api_bp.errorhandler(UnknownElementKind)
def _unknown_element(error):
    logger.error("Unknown custom ID element encountered: %s", error)
    return APIResponse.error("Invalid custom ID format", {'custom_id_format': [str(error)]}, status_code=500)


@api_bp.errorhandler(InvalidCustomId)
def _invalid_custom_id(error):
    return APIResponse.validation_error({'custom_id': [str(error)]}, message="The custom ID format is invalid.")


@api_bp.errorhandler(CustomIdConflict)
def _custom_id_conflict(error):
    return APIResponse.conflict(
        "A duplicate custom ID exists in this inventory. Please try again.",
        {'custom_id': [str(error)]},
    )


@api_bp.errorhandler(ItemVersionConflict)
def _version_conflict(error):
    return APIResponse.conflict(str(error))
