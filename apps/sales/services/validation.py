"""Input validation for sale submissions."""

from apps.sales.serializers import SaleSubmissionSerializer

from .exceptions import SaleValidationError


def validate_sale_submission(data: dict) -> dict:
    """
    Validate a raw sale submission without touching the database.

    Missing and null fields are both reported as required. Line item
    prices are normalised to strings so the list can be stored as JSON.

    Raises:
        SaleValidationError: With a field -> messages mapping
    """
    present = {key: value for key, value in data.items() if value is not None}

    serializer = SaleSubmissionSerializer(data=present)
    if not serializer.is_valid():
        raise SaleValidationError(serializer.errors)

    payload = dict(serializer.validated_data)
    payload['line_items'] = [
        {
            'name': item['name'],
            'quantity': item['quantity'],
            'unit_price': str(item['unit_price']),
        }
        for item in payload['line_items']
    ]
    return payload
