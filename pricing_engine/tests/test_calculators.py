import pytest

from pricing_engine.core.enums import AnnualBasis, Frequency, FrequencyClass, ServiceId
from pricing_engine.schemas.pricing_config import RegionRates, SaniCleanConfig
from pricing_engine.services.registry import CALCULATORS, compute_quote, get_calculator


def quote(service_id, **inputs):
    return compute_quote(service_id, inputs)


class TestRegistry:

    def test_every_service_registered(self):
        assert set(CALCULATORS) == set(ServiceId)

    def test_unknown_service(self):
        with pytest.raises(KeyError):
            get_calculator("laundry")

    @pytest.mark.parametrize("service_id", list(ServiceId))
    def test_empty_inputs_quote_zero(self, service_id):
        outputs = compute_quote(service_id, {})
        assert outputs.per_visit == 0
        assert outputs.monthly_total == 0
        assert outputs.contract_total == 0
        assert outputs.installation_fee == 0

    @pytest.mark.parametrize("service_id", list(ServiceId))
    def test_unknown_frequency_falls_back(self, service_id):
        calculator = get_calculator(service_id)
        outputs = compute_quote(service_id, {"frequency": "every full moon"})
        assert outputs.frequency is calculator.default_frequency

    def test_garbage_quantities_coerce_to_zero(self):
        outputs = quote(ServiceId.CARPET_CLEANING, area_sqft="lots", contract_months="forever")
        assert outputs.per_visit == 0
        assert outputs.contract_months == 12


@pytest.mark.pricing
class TestSaniScrub:

    def test_fixture_minimum(self):
        outputs = quote(ServiceId.SANISCRUB, frequency="monthly", fixture_count=5)
        assert outputs.per_visit == 175
        assert outputs.minimum_applied is True
        assert outputs.price_breakdown["fixture_raw"] == 125
        assert outputs.monthly_total == 175
        assert outputs.visits_per_year == 12
        assert outputs.contract_total == pytest.approx(175 * 12)
        assert outputs.annual_total == outputs.contract_total

    def test_non_bathroom_area(self):
        outputs = quote(ServiceId.SANISCRUB, frequency="monthly", non_bathroom_sqft=1300)
        assert outputs.per_visit == 500

    def test_twice_per_month_bundled_with_saniclean(self):
        outputs = quote(ServiceId.SANISCRUB, frequency="twicePerMonth", fixture_count=10,
                        bundled_with_saniclean=True)
        assert outputs.per_visit == 250
        assert outputs.monthly_base == 2 * 250 - 15
        assert outputs.frequency_class is FrequencyClass.CALENDAR_BASED

    def test_twice_per_month_standalone(self):
        outputs = quote(ServiceId.SANISCRUB, frequency="twicePerMonth", fixture_count=10)
        assert outputs.monthly_base == 500

    def test_quarterly_dirty_install(self):
        outputs = quote(ServiceId.SANISCRUB, frequency="quarterly", fixture_count=5,
                        include_install=True, dirty_install=True)
        assert outputs.per_visit == 250
        assert outputs.installation_fee == 525
        assert outputs.first_period_total == 525
        assert outputs.total_visits == 4
        assert outputs.contract_total == pytest.approx(525 + 3 * 250)

    def test_weekly_is_not_offered(self):
        assert quote(ServiceId.SANISCRUB, frequency="weekly").frequency is Frequency.MONTHLY


@pytest.mark.pricing
class TestCarpetCleaning:

    def test_weekly_dirty_install(self, carpet_inputs):
        outputs = compute_quote(ServiceId.CARPET_CLEANING, carpet_inputs)
        assert outputs.per_visit == 500
        assert outputs.installation_fee == 1500
        assert outputs.first_period_total == pytest.approx(1500 + 3.33 * 500)
        assert outputs.contract_total == pytest.approx(1500 + 3.33 * 500 + 11 * 4.33 * 500)
        assert outputs.annual_total == outputs.contract_total
        assert outputs.annual_basis is AnnualBasis.CONTRACT

    def test_exact_area(self):
        outputs = quote(ServiceId.CARPET_CLEANING, area_sqft=1300, use_exact_sqft=True)
        assert outputs.per_visit == pytest.approx(450)

    def test_minimum(self):
        outputs = quote(ServiceId.CARPET_CLEANING, area_sqft=200)
        assert outputs.per_visit == 250
        assert outputs.minimum_applied is True

    def test_one_time_contract_ignores_months(self):
        short = quote(ServiceId.CARPET_CLEANING, frequency="oneTime", area_sqft=900, contract_months=2)
        long = quote(ServiceId.CARPET_CLEANING, frequency="oneTime", area_sqft=900, contract_months=36)
        assert short.contract_total == long.contract_total == short.first_period_total == 375

    def test_custom_line_items_add_to_contract(self):
        outputs = quote(ServiceId.CARPET_CLEANING, area_sqft=500, rate_tier="premium",
                        custom_line_items=[{"label": "Stain treatment", "amount": 100}])
        assert outputs.contract_total == pytest.approx(250 * 12 * 1.3 + 100)


@pytest.mark.pricing
class TestSaniClean:

    def test_inside_beltway_per_item(self):
        outputs = quote(ServiceId.SANICLEAN, sinks=4, urinals=4, male_toilets=2, female_toilets=2)
        assert outputs.per_visit == 84 + 8
        assert outputs.monthly_trip == pytest.approx(8 * 4.33)
        assert outputs.monthly_total == pytest.approx(92 * 4.33)
        assert outputs.annual_total == pytest.approx(92 * 4.33 * 12)

    def test_parking(self):
        outputs = quote(ServiceId.SANICLEAN, sinks=6, female_toilets=6, needs_parking=True)
        assert outputs.per_visit == 84 + 15

    def test_outside_beltway(self):
        outputs = quote(ServiceId.SANICLEAN, location="outsideBeltway", sinks=6, female_toilets=6)
        assert outputs.per_visit == 72 + 8

    def test_small_facility_minimum_includes_trip(self):
        outputs = quote(ServiceId.SANICLEAN, sinks=2, female_toilets=2)
        assert outputs.per_visit == 50
        assert outputs.monthly_trip == 0
        assert outputs.minimum_applied is True

    def test_all_inclusive(self):
        outputs = quote(ServiceId.SANICLEAN, pricing_mode="allInclusive", sinks=4, urinals=4,
                        male_toilets=2, female_toilets=2, estimated_paper_spend=100)
        assert outputs.price_breakdown["paper_overage"] == 40
        assert outputs.per_visit == 240 + 40

    def test_facility_components_are_monthly(self):
        outputs = quote(ServiceId.SANICLEAN, sinks=6, female_toilets=6, urinal_screens=2, sanipods=1)
        assert outputs.monthly_total == pytest.approx(92 * 4.33 + 20)

    def test_luxury_soap(self):
        outputs = quote(ServiceId.SANICLEAN, sinks=6, female_toilets=6, soap_type="luxury",
                        excess_soap_gallons=1)
        assert outputs.price_breakdown["luxury_soap_upgrade"] == 30
        assert outputs.price_breakdown["excess_soap"] == 30

    def test_tier_applies_after_minimum(self):
        config = SaniCleanConfig(inside_beltway=RegionRates(
            rate_per_fixture=7, weekly_minimum=60, trip_charge=8, parking_fee=7,
        ))
        outputs = compute_quote(ServiceId.SANICLEAN, {"sinks": 3, "female_toilets": 3, "rate_tier": "green"}, config)
        assert outputs.minimum_applied is True
        assert outputs.per_visit == pytest.approx((60 + 8) * 1.3)


@pytest.mark.pricing
class TestRpmWindows:

    def test_biweekly(self):
        outputs = quote(ServiceId.RPM_WINDOWS, frequency="biweekly",
                        small_windows=10, medium_windows=5, large_windows=2)
        assert outputs.per_visit == pytest.approx(44 * 1.25 + 8)
        assert outputs.monthly_base == pytest.approx(55 * 2.165)
        assert outputs.monthly_trip == pytest.approx(8 * 2.165)

    def test_first_time_install_and_annual(self):
        outputs = quote(ServiceId.RPM_WINDOWS, frequency="weekly", small_windows=10, medium_windows=5,
                        large_windows=2, include_install=True, dirty_install=True)
        assert outputs.installation_fee == pytest.approx((44 + 8) * 3)
        assert outputs.annual_total == pytest.approx(outputs.monthly_total * 12 + 156)
        assert outputs.annual_basis is AnnualBasis.RECURRING

    def test_no_trip_without_windows(self):
        outputs = quote(ServiceId.RPM_WINDOWS, frequency="weekly")
        assert outputs.monthly_trip == 0


@pytest.mark.pricing
class TestFoamingDrain:

    @pytest.mark.parametrize("drains,expected", [
        (2, 50),      # $20 flat, floored at the visit minimum
        (4, 50),      # 36 alternative
        (10, 60),     # alternative beats $100 flat
        (20, 100),    # 200 flat vs 100 alternative
    ])
    def test_standard_drains(self, drains, expected):
        assert quote(ServiceId.FOAMING_DRAIN, standard_drains=drains).per_visit == expected

    def test_big_account_rate(self):
        assert quote(ServiceId.FOAMING_DRAIN, standard_drains=10, use_big_account_rate=True).per_visit == 100

    def test_volume_pricing(self):
        outputs = quote(ServiceId.FOAMING_DRAIN, standard_drains=12, install_drains=4)
        assert outputs.price_breakdown["standard_drains"] == 52
        assert outputs.price_breakdown["volume_drains"] == 80
        assert outputs.per_visit == 132

    def test_all_inclusive_drains_are_free(self):
        outputs = quote(ServiceId.FOAMING_DRAIN, standard_drains=8, grease_traps=1, all_inclusive=True)
        assert outputs.per_visit == 125

    def test_filthy_and_grease_install(self):
        outputs = quote(ServiceId.FOAMING_DRAIN, standard_drains=6, filthy_drains=3, grease_traps=2,
                        include_install=True, dirty_install=True)
        assert outputs.price_breakdown["filthy_install"] == 90
        assert outputs.installation_fee == 90 + 600

    def test_big_account_waives_filthy_install(self):
        outputs = quote(ServiceId.FOAMING_DRAIN, standard_drains=6, filthy_drains=3,
                        use_big_account_rate=True, include_install=True, dirty_install=True)
        assert outputs.installation_fee == 0


@pytest.mark.pricing
class TestOtherServices:

    def test_grease_trap(self):
        outputs = quote(ServiceId.GREASE_TRAP, trap_count=2, trap_gallons=100)
        assert outputs.per_visit == 300
        assert outputs.annual_total == pytest.approx(3600)

    def test_microfiber_mopping(self):
        outputs = quote(ServiceId.MICROFIBER_MOPPING, bathroom_count=4, extra_area_sqft=1000,
                        standalone_sqft=500)
        assert outputs.price_breakdown["bathrooms"] == 40
        assert outputs.price_breakdown["extra_area"] == 100
        assert outputs.price_breakdown["standalone_area"] == 40
        assert outputs.per_visit == 180
        assert outputs.minimum_applied is True

    def test_microfiber_exact_units(self):
        outputs = quote(ServiceId.MICROFIBER_MOPPING, standalone_sqft=1100, use_exact_sqft=True)
        assert outputs.per_visit == pytest.approx(55)

    @pytest.mark.parametrize("hours,short_job,expected", [
        (2, False, 120),
        (6, False, 180),
        (2, True, 100),
    ])
    def test_janitorial(self, hours, short_job, expected):
        outputs = quote(ServiceId.JANITORIAL, hours_per_visit=hours, short_job=short_job)
        assert outputs.per_visit == expected

    def test_janitorial_dirty_initial_visit(self):
        outputs = quote(ServiceId.JANITORIAL, hours_per_visit=6, include_install=True, dirty_install=True)
        assert outputs.installation_fee == 540
        assert outputs.first_visit == 540

    def test_electrostatic_by_room(self):
        assert quote(ServiceId.ELECTROSTATIC_SPRAY, room_count=10).per_visit == 210
        assert quote(ServiceId.ELECTROSTATIC_SPRAY, room_count=10,
                     combined_with_saniclean=True).per_visit == 200

    def test_electrostatic_by_area(self):
        rounded = quote(ServiceId.ELECTROSTATIC_SPRAY, pricing_method="bySqft", area_sqft=2500,
                        location="outsideBeltway")
        exact = quote(ServiceId.ELECTROSTATIC_SPRAY, pricing_method="bySqft", area_sqft=2500,
                      location="outsideBeltway", use_exact_sqft=True)
        assert rounded.per_visit == 150
        assert exact.per_visit == pytest.approx(125)

    @pytest.mark.parametrize("exact,expected", [(True, 25), (False, 50)])
    def test_electrostatic_area_below_one_tier(self, exact, expected):
        outputs = quote(ServiceId.ELECTROSTATIC_SPRAY, pricing_method="bySqft", area_sqft=500,
                        location="outsideBeltway", use_exact_sqft=exact)
        assert outputs.per_visit == pytest.approx(expected)

    @pytest.mark.parametrize("variant,sqft,expected", [
        ("standardFull", 1000, 750),
        ("standardFull", 500, 550),
        ("noSealant", 1000, 700),
        ("wellMaintained", 2000, 800),
        ("mystery", 1000, 750),
    ])
    def test_strip_wax(self, variant, sqft, expected):
        outputs = quote(ServiceId.STRIP_WAX, variant=variant, floor_sqft=sqft)
        assert outputs.per_visit == pytest.approx(expected)

    @pytest.mark.parametrize("pods,expected", [(4, 32), (10, 70)])
    def test_sanipod_cheaper_rate(self, pods, expected):
        assert quote(ServiceId.SANIPOD, pod_count=pods).per_visit == expected

    def test_sanipod_one_time_bags(self):
        outputs = quote(ServiceId.SANIPOD, pod_count=4, extra_bags=3, extra_bags_recurring=False,
                        include_install=True)
        assert outputs.per_visit == 32
        assert outputs.installation_fee == 100
        assert outputs.first_visit == 106
        assert outputs.first_period_total == pytest.approx(100 + 3.33 * 32 + 6)


@pytest.mark.pricing
class TestRefreshPowerScrub:

    def test_dumpster_priced_at_minimum(self):
        outputs = quote(ServiceId.REFRESH_POWER_SCRUB, dumpster={"included": True})
        assert outputs.per_visit == 475
        assert outputs.frequency is Frequency.ONE_TIME

    def test_excluded_areas_are_not_priced(self):
        outputs = quote(ServiceId.REFRESH_POWER_SCRUB, dumpster={"included": False, "hours": 4})
        assert outputs.per_visit == 0

    @pytest.mark.parametrize("mode,expected", [("standalone", 875), ("upsell", 500)])
    def test_patio(self, mode, expected):
        outputs = quote(ServiceId.REFRESH_POWER_SCRUB, patio={"included": True, "patio_mode": mode})
        assert outputs.per_visit == expected

    def test_walkway_prices_outside_area_with_trip(self):
        outputs = quote(ServiceId.REFRESH_POWER_SCRUB,
                        walkway={"included": True, "outside_sqft": 1000, "inside_sqft": 5000})
        assert outputs.per_visit == pytest.approx(200 + 400 + 75)

    @pytest.mark.parametrize("size,expected", [("smallMedium", 1500), ("large", 2500), ("huge", 2500)])
    def test_back_of_house_kitchen(self, size, expected):
        outputs = quote(ServiceId.REFRESH_POWER_SCRUB,
                        back_of_house={"included": True, "kitchen_size": size})
        assert outputs.per_visit == expected

    def test_hourly(self):
        outputs = quote(ServiceId.REFRESH_POWER_SCRUB,
                        other={"included": True, "pricing_method": "hourly", "workers": 2, "hours": 3})
        assert outputs.per_visit == 1275
        assert outputs.minimum_applied is False

    def test_hourly_without_hours_floors_at_minimum(self):
        outputs = quote(ServiceId.REFRESH_POWER_SCRUB,
                        other={"included": True, "pricing_method": "hourly", "hours": 0})
        assert outputs.per_visit == 475
        assert outputs.minimum_applied is True

    def test_square_footage(self):
        outputs = quote(ServiceId.REFRESH_POWER_SCRUB,
                        front_of_house={"included": True, "pricing_method": "squareFootage",
                                        "inside_sqft": 1000, "outside_sqft": 500})
        assert outputs.per_visit == pytest.approx(200 + 600 + 200 + 75)

    def test_areas_add_up(self):
        outputs = quote(ServiceId.REFRESH_POWER_SCRUB,
                        dumpster={"included": True},
                        patio={"included": True, "patio_mode": "upsell"},
                        front_of_house={"included": True})
        assert outputs.per_visit == 475 + 500 + 2500
        assert outputs.price_breakdown["area_patio"] == 500
        assert outputs.price_breakdown["areas_priced"] == 3

    def test_premium_tier(self):
        outputs = quote(ServiceId.REFRESH_POWER_SCRUB, rate_tier="premium",
                        front_of_house={"included": True})
        assert outputs.per_visit == pytest.approx(2500 * 1.3)

    def test_one_time_contract_is_one_visit(self):
        outputs = quote(ServiceId.REFRESH_POWER_SCRUB, front_of_house={"included": True},
                        contract_months=24)
        assert outputs.contract_total == outputs.per_visit == 2500
        assert outputs.installation_fee == 0
