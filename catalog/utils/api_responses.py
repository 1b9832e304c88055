from flask import jsonify, request, Response
from typing import Any, Dict, Optional, List


class APIResponse:
    """Standardized API response handler"""

    @staticmethod
    def success(data: Any = None, message: str = "Success", status_code: int = 200) -> Response:
        response_data = {
            'success': True,
            'message': message,
            'data': data
        }
        return jsonify(response_data), status_code

    @staticmethod
    def error(message: str, errors: Optional[Dict] = None, status_code: int = 400) -> Response:
        response_data = {
            'success': False,
            'message': message,
            'errors': errors or {}
        }
        return jsonify(response_data), status_code

    @staticmethod
    def validation_error(errors: Dict[str, List[str]], message: str = "Validation failed") -> Response:
        return APIResponse.error(message=message, errors=errors, status_code=422)

    @staticmethod
    def not_found(resource: str = "Resource") -> Response:
        return APIResponse.error(message=f"{resource} not found", status_code=404)

    @staticmethod
    def conflict(message: str, errors: Optional[Dict] = None) -> Response:
        return APIResponse.error(message=message, errors=errors, status_code=409)

    @staticmethod
    def handle_request_content() -> Dict[str, Any]:
        """JSON body when present, otherwise form fields"""
        if request.is_json:
            return request.get_json(silent=True) or {}
        elif request.form:
            return request.form.to_dict()
        else:
            return {}


__all__ = ['APIResponse']
