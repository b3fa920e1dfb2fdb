"""
Tests for surcharge pricing and price labels.
"""
import logging

import pytest

from bundle_wizard.wizard import (
    BundleConfirmation,
    BundleProduct,
    Flavor,
    FlavorCatalog,
    FlavorType,
    IncludedItemLine,
    PricingCalculator,
    RICE_UPGRADE,
    SelectedFlavorLine,
    FlavorCategory,
    SingleSelection,
    SlotAllocation,
    build_steps,
    compute_line_total,
    format_price,
    format_surcharge_label,
)


@pytest.fixture
def steps(wings_meal_components):
    return build_steps(wings_meal_components, (RICE_UPGRADE,))


@pytest.fixture
def calculator(flavors):
    return PricingCalculator(FlavorCatalog(flavors))


class TestLabels:
    def test_format_price(self):
        assert format_price(40) == "₱40.00"
        assert format_price(299.5) == "₱299.50"

    def test_special_flavor_label(self):
        flavor = Flavor(id="f", name="Buffalo", flavor_type=FlavorType.SPECIAL, surcharge=40.0)
        assert format_surcharge_label(flavor) == "+₱40.00"

    @pytest.mark.parametrize("surcharge", [None, 0.0])
    def test_free_flavor_label(self, surcharge):
        flavor = Flavor(id="f", name="Original", surcharge=surcharge)
        assert format_surcharge_label(flavor) == "FREE"
        assert flavor.is_free is True


class TestStepSurcharge:
    def test_slot_step_charges_each_distinct_flavor_once(self, calculator, steps):
        wings_step = steps[0]
        two_flavors = SlotAllocation(allocations={"buffalo": 3, "garlic-parm": 3})
        one_flavor = SlotAllocation(allocations={"buffalo": 6})

        assert calculator.step_surcharge(wings_step, two_flavors) == pytest.approx(80.0)
        assert calculator.step_surcharge(wings_step, one_flavor) == pytest.approx(40.0)

    def test_free_flavors_add_nothing(self, calculator, steps):
        selection = SlotAllocation(allocations={"original": 3, "honey-bbq": 3})
        assert calculator.step_surcharge(steps[0], selection) == 0.0

    def test_single_step(self, calculator, steps):
        assert calculator.step_surcharge(steps[1], SingleSelection(flavor_id="coke")) == 0.0
        assert calculator.step_surcharge(steps[1], SingleSelection()) == 0.0

    def test_upgrade_step_uses_chosen_option(self, calculator, steps):
        upgrade_step = steps[2]
        assert calculator.step_surcharge(upgrade_step, None, "java") == pytest.approx(40.0)
        assert calculator.step_surcharge(upgrade_step, None, "plain") == 0.0

    def test_missing_flavor_priced_as_free_with_warning(self, calculator, steps, caplog):
        selection = SlotAllocation(allocations={"ghost": 3})
        with caplog.at_level(logging.WARNING):
            assert calculator.step_surcharge(steps[0], selection) == 0.0
        assert any("ghost" in r.message for r in caplog.records)


class TestTotalSurcharge:
    def test_two_special_wings_and_free_drink(self, calculator, steps):
        selections = {
            0: SlotAllocation(allocations={"buffalo": 3, "garlic-parm": 3}),
            1: SingleSelection(flavor_id="coke"),
        }
        total = calculator.total_surcharge(steps, selections, {"rice": "plain"})
        assert total == pytest.approx(80.0)

    def test_includes_upgrade(self, calculator, steps):
        selections = {
            0: SlotAllocation(allocations={"buffalo": 6}),
            1: SingleSelection(flavor_id="coke"),
        }
        total = calculator.total_surcharge(steps, selections, {"rice": "java"})
        assert total == pytest.approx(80.0)


class TestLineTotal:
    def test_surcharge_added_once_per_line(self):
        confirmation = BundleConfirmation(
            product=BundleProduct(id="b", name="6 pcs Wings Meal", price=299.0),
            selected_flavors=(
                SelectedFlavorLine(
                    flavor_id="buffalo", name="Buffalo", quantity=6,
                    surcharge=40.0, category=FlavorCategory.WINGS,
                ),
            ),
            included_items=(IncludedItemLine(name="Java Rice", quantity=1, surcharge=40.0),),
        )
        assert confirmation.total_surcharge == pytest.approx(80.0)
        assert confirmation.unit_price == pytest.approx(379.0)
        assert compute_line_total(confirmation) == pytest.approx(379.0)
        assert compute_line_total(confirmation, quantity=2) == pytest.approx(678.0)


class TestFlavorType:
    def test_all_time_reads_as_standard(self):
        assert FlavorType("all_time") is FlavorType.STANDARD
        flavor = Flavor(id="f", name="Lemon", flavor_type="all_time", surcharge=0.0)
        assert flavor.is_special is False

    def test_unknown_type_is_rejected(self):
        with pytest.raises(ValueError):
            FlavorType("seasonal")
