# Shopify GraphQL client unit tests
import json

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock

from product_reviews.core.exceptions import UpstreamError
from product_reviews.services.shopify.client import (
    PRODUCTS_QUERY,
    UPDATE_VARIANT_PRICE_MUTATION,
    ShopifyGraphQLClient,
)
from tests.conftest import make_connection


def mock_response(status_code=200, payload=None, text=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = text if text is not None else json.dumps(payload)
    return response


@pytest.fixture
def mock_http(mocker):
    """Patch httpx.AsyncClient and hand back the awaited ``post`` mock."""
    mock_client = mocker.patch("httpx.AsyncClient")
    post = AsyncMock()
    mock_client.return_value.__aenter__.return_value.post = post
    return post


@pytest.fixture
def client():
    return ShopifyGraphQLClient("x.myshopify.com", "shpat_abc", api_version="2025-04", timeout=5.0)


"""
1. Request construction
"""

@pytest.mark.asyncio
async def test_list_products_first_page_request(mock_http, client):
    mock_http.return_value = mock_response(payload={"data": {"products": make_connection([1, 2])}})

    await client.list_products(page_size=10)

    args, kwargs = mock_http.call_args
    assert args[0] == "https://x.myshopify.com/admin/api/2025-04/graphql.json"
    assert kwargs["headers"]["X-Shopify-Access-Token"] == "shpat_abc"
    assert kwargs["headers"]["Content-Type"] == "application/json"
    assert kwargs["json"]["query"] == PRODUCTS_QUERY
    assert kwargs["json"]["variables"] == {"first": 10}


def test_bare_shop_handle_is_expanded():
    client = ShopifyGraphQLClient("my-shop", "token", api_version="2024-04")
    assert client.graphql_url == "https://my-shop.myshopify.com/admin/api/2024-04/graphql.json"


@pytest.mark.parametrize(
    "after, before, expected",
    [
        ("abc", None, {"first": 3, "after": "abc"}),
        (None, "xyz", {"last": 3, "before": "xyz"}),
        ("abc", "xyz", {"first": 3, "after": "abc"}),
        ("", "xyz", {"last": 3, "before": "xyz"}),
    ],
)
@pytest.mark.asyncio
async def test_list_products_cursor_variables(mock_http, client, after, before, expected):
    mock_http.return_value = mock_response(payload={"data": {"products": make_connection([1])}})

    await client.list_products(after=after, before=before, page_size=3)

    _, kwargs = mock_http.call_args
    assert kwargs["json"]["variables"] == expected


@pytest.mark.asyncio
async def test_list_products_returns_connection(mock_http, client):
    connection = make_connection([1, 2, 3], has_next=True)
    mock_http.return_value = mock_response(payload={"data": {"products": connection}})

    result = await client.list_products()

    assert result == connection
    assert "variants(first: 5)" in PRODUCTS_QUERY


"""
2. Failure handling
"""

@pytest.mark.asyncio
async def test_non_2xx_raises_upstream_error(mock_http, client):
    mock_http.return_value = mock_response(status_code=401, payload=None, text="Invalid API key or access token")

    with pytest.raises(UpstreamError) as exc_info:
        await client.list_products()

    assert exc_info.value.status_code == 401
    assert exc_info.value.body == "Invalid API key or access token"


@pytest.mark.asyncio
async def test_missing_products_raises_upstream_error(mock_http, client):
    mock_http.return_value = mock_response(payload={"data": {}})

    with pytest.raises(UpstreamError, match="Failed to fetch products from Shopify"):
        await client.list_products()


@pytest.mark.asyncio
async def test_graphql_errors_on_list_raise(mock_http, client):
    errors = [{"message": "Throttled"}]
    mock_http.return_value = mock_response(payload={"errors": errors})

    with pytest.raises(UpstreamError) as exc_info:
        await client.list_products()

    assert exc_info.value.errors == errors


@pytest.mark.asyncio
async def test_invalid_json_raises_upstream_error(mock_http, client):
    response = mock_response(text="<html>oops</html>")
    response.json.side_effect = json.JSONDecodeError("Expecting value", "<html>", 0)
    mock_http.return_value = response

    with pytest.raises(UpstreamError, match="Failed to decode"):
        await client.list_products()


@pytest.mark.asyncio
async def test_timeout_raises_upstream_error(mock_http, client):
    mock_http.side_effect = httpx.ReadTimeout("timed out")

    with pytest.raises(UpstreamError, match="timed out"):
        await client.list_products()


@pytest.mark.asyncio
async def test_network_error_raises_upstream_error(mock_http, client):
    mock_http.side_effect = httpx.ConnectError("connection refused")

    with pytest.raises(UpstreamError, match="Network error"):
        await client.list_products()


"""
3. Variant price mutation
"""

@pytest.mark.asyncio
async def test_update_variant_price_success(mock_http, client):
    mock_http.return_value = mock_response(payload={
        "data": {
            "productVariantsBulkUpdate": {
                "product": {"id": "gid://Product/1"},
                "productVariants": [{"id": "gid://Variant/1", "price": "19.99"}],
                "userErrors": [],
            }
        }
    })

    result = await client.update_variant_price("gid://Product/1", "gid://Variant/1", "19.99")

    _, kwargs = mock_http.call_args
    assert kwargs["json"]["query"] == UPDATE_VARIANT_PRICE_MUTATION
    assert kwargs["json"]["variables"] == {
        "productId": "gid://Product/1",
        "variants": [{"id": "gid://Variant/1", "price": "19.99"}],
    }
    assert result == {
        "product": {"id": "gid://Product/1"},
        "variants": [{"id": "gid://Variant/1", "price": "19.99"}],
    }


@pytest.mark.asyncio
async def test_update_variant_price_user_errors_kept_verbatim(mock_http, client):
    user_errors = [{"field": ["variants", "0", "price"], "message": "Price must be greater than or equal to 0"}]
    mock_http.return_value = mock_response(payload={
        "data": {
            "productVariantsBulkUpdate": {
                "product": {"id": "gid://Product/1"},
                "productVariants": [],
                "userErrors": user_errors,
            }
        }
    })

    with pytest.raises(UpstreamError) as exc_info:
        await client.update_variant_price("gid://Product/1", "gid://Variant/1", "-1")

    assert exc_info.value.errors == user_errors


@pytest.mark.asyncio
async def test_update_variant_price_graphql_errors(mock_http, client):
    errors = [{"message": "Variable $productId of type ID! was provided invalid value"}]
    mock_http.return_value = mock_response(payload={"errors": errors})

    with pytest.raises(UpstreamError) as exc_info:
        await client.update_variant_price("bad", "gid://Variant/1", "1.00")

    assert exc_info.value.errors == errors
