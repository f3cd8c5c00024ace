"""Tests for cart commands through MarketplaceService."""

from marketplace.cart.items import find_cart


class TestCartCommands:
    def test_add_creates_cart_on_first_use(self, service, buyer):
        result = service.add_to_cart("buyer1", "p1")

        assert result.ok is True
        assert find_cart("buyer1").lines() == [("p1", 1)]

    def test_add_merges_quantities(self, service, buyer):
        service.add_to_cart("buyer1", "p1", 2)
        service.add_to_cart("buyer1", "p1", 3)
        assert find_cart("buyer1").lines() == [("p1", 5)]

    def test_carts_do_not_check_products(self, service, buyer):
        assert service.add_to_cart("buyer1", "does-not-exist").ok is True

    def test_set_quantity(self, service, buyer):
        service.add_to_cart("buyer1", "p1")

        result = service.set_quantity("buyer1", "p1", 4)

        assert result.ok is True
        assert find_cart("buyer1").lines() == [("p1", 4)]

    def test_set_quantity_on_missing_line(self, service, buyer):
        result = service.set_quantity("buyer1", "p1", 4)
        assert result.ok is False
        assert result.reason == "NotFound"

    def test_set_quantity_below_one(self, service, buyer):
        service.add_to_cart("buyer1", "p1")

        result = service.set_quantity("buyer1", "p1", 0)

        assert result.reason == "ValidationFailed"
        assert find_cart("buyer1").lines() == [("p1", 1)]

    def test_remove_from_cart(self, service, buyer):
        service.add_to_cart("buyer1", "p1")
        service.add_to_cart("buyer1", "p2")

        assert service.remove_from_cart("buyer1", "p1").ok is True

        assert find_cart("buyer1").lines() == [("p2", 1)]

    def test_remove_absent_product_is_ok(self, service, buyer):
        assert service.remove_from_cart("buyer1", "p1").ok is True

    def test_clear_cart(self, service, buyer):
        service.add_to_cart("buyer1", "p1")
        service.add_to_cart("buyer1", "p2")

        assert service.clear_cart("buyer1").ok is True

        assert find_cart("buyer1").is_empty

    def test_cart_view_prices_available_lines(self, service, buyer, vendor_a, make_product):
        make_product("pa", vendor_id="vendor-a", price=500, name="Chicken Pie")
        service.add_to_cart("buyer1", "pa", 2)
        service.add_to_cart("buyer1", "ghost")

        view = service.cart("buyer1")

        assert view["total"] == 1000
        assert view["total_display"] == "₦10.00"
        assert view["lines"][0]["name"] == "Chicken Pie"
        assert view["lines"][1]["available"] is False
