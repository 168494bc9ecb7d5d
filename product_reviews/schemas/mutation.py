"""
Request shapes accepted by the mutation endpoint.

Every request is one of a closed set of variants, told apart by ``action``.
Older embedded-app builds post without ``action``; for those the tag is
inferred from which fields are present before validation runs.
"""
from typing import Annotated, Any, Dict, Literal, Union

from pydantic import Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from product_reviews.core.exceptions import ValidationError
from .base import CamelSchema

REVIEW_ACTION = "review"
PRICE_ACTION = "price"


class ReviewMutation(CamelSchema):
    action: Literal["review"] = REVIEW_ACTION
    shop: str = Field(min_length=1)
    product_id: str = Field(min_length=1)
    # Empty string is allowed: it is how the merchant clears a review
    review_snippet: str


class PriceMutation(CamelSchema):
    action: Literal["price"] = PRICE_ACTION
    shop: str = Field(min_length=1)
    product_id: str = Field(min_length=1)
    variant_id: str = Field(min_length=1)
    # Any defined value is forwarded as-is (0 and "0" included); only a missing key is rejected
    price: Any


MutationRequest = Annotated[
    Union[ReviewMutation, PriceMutation],
    Field(discriminator="action"),
]

_mutation_adapter = TypeAdapter(MutationRequest)

MISSING_FIELDS = {
    REVIEW_ACTION: "Missing required fields: 'shop', 'productId', or 'reviewSnippet'",
    PRICE_ACTION: "Missing required fields: 'shop', 'variantId', 'productId', or 'price'",
}


def infer_action(payload: Dict[str, Any]) -> str:
    """Pick the variant for a payload that carries no ``action``."""
    if (
        payload.get("shop")
        and payload.get("productId")
        and isinstance(payload.get("reviewSnippet"), str)
    ):
        return REVIEW_ACTION
    return PRICE_ACTION


def parse_mutation_request(payload: Any) -> Union[ReviewMutation, PriceMutation]:
    """
    Validate a raw JSON body against the closed set of mutation shapes.

    Raises:
        ValidationError: body is not an object, names an unknown action, or
            lacks a field its variant requires.
    """
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")

    action = payload.get("action")
    if action is None:
        action = infer_action(payload)
        payload = {**payload, "action": action}
    elif not isinstance(action, str) or action not in MISSING_FIELDS:
        raise ValidationError(f"Unsupported action: {action!r}")

    try:
        return _mutation_adapter.validate_python(payload)
    except PydanticValidationError as exc:
        raise ValidationError(MISSING_FIELDS[action]) from exc
