# tests/test_assistant.py
import httpx
import pytest

from agent.assistant import ProductAssistant
from core.client import ProductAPIClient


@pytest.fixture
def assistant(api):
    return ProductAssistant(api)


def test_add_remembers_the_product(assistant, api):
    reply = assistant.add_product("Ceramic Mug", 1299, quantity=40)
    product_id = assistant.memory.last_product_id
    assert product_id is not None
    assert "Added 'Ceramic Mug' at $12.99" in reply
    assert api.get_product(product_id).quantity == 40


def test_follow_ups_use_memory(assistant, api):
    assistant.add_product("Ceramic Mug", 1299)
    product_id = assistant.memory.last_product_id

    assert assistant.update_price(1450) == "Done. 'Ceramic Mug' now costs $14.50."
    assert assistant.restock(12) == "'Ceramic Mug' now has 12 in stock."
    assert "$14.50" in assistant.describe_product()

    product = api.get_product(product_id)
    assert (product.price_cents, product.quantity) == (1450, 12)


def test_without_memory_asks_which_product(assistant):
    reply = assistant.update_price(999)
    assert "not sure which product" in reply


def test_explicit_id_switches_current_product(assistant, api):
    other = api.add_product("Teapot", 2500)
    assistant.add_product("Mug", 1299)
    assistant.describe_product(other.id)
    assert assistant.memory.last_product_id == other.id


def test_remove_forgets_and_404_is_explained(assistant, api):
    assistant.add_product("Mug", 1299)
    product_id = assistant.memory.last_product_id

    assert assistant.remove_product() == "Removed 'Mug' from the catalog."
    assert assistant.memory.last_product_id is None
    assert "not sure which product" in assistant.update_price(100)

    reply = assistant.describe_product(product_id)
    assert "there's no product with id" in reply


def test_remembered_product_deleted_elsewhere(assistant, api):
    assistant.add_product("Mug", 1299)
    api.delete_product(assistant.memory.last_product_id)

    reply = assistant.update_price(999)
    assert "no longer exists, so I've forgotten it" in reply
    assert assistant.memory.last_product_id is None


def test_rejected_values_are_explained(assistant):
    assistant.add_product("Mug", 1299)
    reply = assistant.update_price(-1)
    assert reply.startswith("I couldn't update the price because the catalog rejected the values")
    assert "price_cents" in reply
    # The product is still the current one.
    assert assistant.memory.last_product_id is not None


def test_catalog_listing_and_search(assistant, api):
    assert assistant.list_catalog() == "The catalog has no products yet."
    api.add_product("Ceramic Mug", 1299, category="kitchen")
    teapot = api.add_product("Teapot", 2500, category="kitchen")
    api.add_product("Shovel", 3000, category="garden")

    listing = assistant.list_catalog("kitchen")
    assert listing.startswith("There are 2 products in 'kitchen':")

    assert assistant.find_products("pot").startswith("Found one match:")
    assert assistant.memory.last_product_id == teapot.id
    assert "Nothing in the catalog matches" in assistant.find_products("lamp")


def test_unreachable_api_is_explained():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    http = httpx.Client(base_url="http://catalog.test", transport=httpx.MockTransport(refuse))
    assistant = ProductAssistant(ProductAPIClient(http=http))
    reply = assistant.add_product("Mug", 1299)
    assert "isn't responding" in reply
    assert assistant.memory.last_product_id is None


def test_history_and_forget(assistant):
    assistant.add_product("Mug", 1299)
    assistant.forget()
    assert assistant.memory.last_product_id is None
    assert len(assistant.memory.history) == 2


def test_tools_are_bound_methods(assistant):
    names = [fn.__name__ for fn in assistant.tools()]
    assert names[:2] == ["add_product", "update_price"]
    assert "forget" in names


def test_traversal_shaped_id_removes_nothing(assistant, api):
    decoy = api.add_product("Decoy", 100)
    victim = api.add_product("Victim", 200)

    reply = assistant.remove_product(f"{decoy.id}/../{victim.id}")
    assert "there's no product with id" in reply
    assert len(api.list_products()) == 2


def test_unexpected_status_is_reported_with_detail():
    http = httpx.Client(
        base_url="http://catalog.test",
        transport=httpx.MockTransport(lambda request: httpx.Response(502, json={"detail": "upstream down"})),
    )
    assistant = ProductAssistant(ProductAPIClient(http=http))
    reply = assistant.describe_product("abc")
    assert reply == "I couldn't look that product up: the catalog returned an error (502: upstream down)."


def test_unknown_explicit_id_keeps_the_current_product(assistant):
    assistant.add_product("Mug", 1299)
    remembered = assistant.memory.last_product_id

    reply = assistant.describe_product("not-a-real-id")
    assert "there's no product with id not-a-real-id" in reply
    assert assistant.memory.last_product_id == remembered
