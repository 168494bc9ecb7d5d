from .base import BaseSchema, CamelSchema
from .product import PageInfo, ProductPage
from .review import ReviewRead, ReviewSummary
from .mutation import (
    MutationRequest,
    PriceMutation,
    ReviewMutation,
    parse_mutation_request,
)
