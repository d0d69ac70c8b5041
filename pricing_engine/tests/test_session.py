import math

import pytest
from pydantic import ValidationError

from pricing_engine.core.enums import ConfigSource, QuoteField, ServiceId
from pricing_engine.core.metrics import registry
from pricing_engine.services.session import QuoteSession, SessionStore


@pytest.fixture
def carpet_session(config_provider, carpet_inputs):
    return QuoteSession(ServiceId.CARPET_CLEANING, config_provider, carpet_inputs)


@pytest.mark.overrides
class TestSessionOverrides:

    def test_override_is_exposed_without_touching_computation(self, carpet_session):
        computed = carpet_session.outputs.contract_total
        carpet_session.set_override(QuoteField.CONTRACT_TOTAL, 9000)

        assert carpet_session.exposed(QuoteField.CONTRACT_TOTAL) == 9000
        assert carpet_session.outputs.contract_total == computed
        fields = carpet_session.exposed_fields()
        assert fields[QuoteField.CONTRACT_TOTAL].is_overridden
        assert not fields[QuoteField.PER_VISIT].is_overridden

    def test_pricing_input_change_clears_overrides(self, carpet_session):
        carpet_session.set_override(QuoteField.PER_VISIT, 450)
        carpet_session.set_override(QuoteField.INSTALLATION_FEE, 0)

        carpet_session.update_inputs({"areaSqft": 1800})

        assert len(carpet_session.overrides) == 0
        assert carpet_session.exposed(QuoteField.PER_VISIT) == 250 + 3 * 125

    def test_notes_change_keeps_overrides(self, carpet_session):
        carpet_session.set_override(QuoteField.PER_VISIT, 450)
        carpet_session.update_inputs({"notes": "Call before arrival"})
        assert carpet_session.exposed(QuoteField.PER_VISIT) == 450
        assert carpet_session.inputs.notes == "Call before arrival"

    def test_unknown_keys_are_ignored(self, carpet_session):
        carpet_session.set_override(QuoteField.PER_VISIT, 450)
        carpet_session.update_inputs({"colour": "blue"})
        assert QuoteField.PER_VISIT in carpet_session.overrides

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite_override_rejected(self, carpet_session, value):
        with pytest.raises(ValueError):
            carpet_session.set_override(QuoteField.PER_VISIT, value)

    def test_clear_single_override(self, carpet_session):
        carpet_session.set_override(QuoteField.PER_VISIT, 450)
        assert carpet_session.clear_override(QuoteField.PER_VISIT) is True
        assert carpet_session.clear_override(QuoteField.PER_VISIT) is False
        assert carpet_session.exposed(QuoteField.PER_VISIT) == 500


class TestSessionInputs:

    def test_snake_and_camel_keys(self, carpet_session):
        carpet_session.update_inputs({"area_sqft": 500, "useExactSqft": True})
        assert carpet_session.inputs.area_sqft == 500
        assert carpet_session.inputs.use_exact_sqft is True

    def test_recomputes_on_every_update(self, carpet_session):
        carpet_session.update_inputs({"frequency": "monthly", "includeInstall": False})
        assert carpet_session.outputs.installation_fee == 0
        assert carpet_session.outputs.monthly_total == 500


@pytest.mark.config
class TestSessionConfig:

    def test_edit_config_reprices_and_clears_overrides(self, carpet_session):
        carpet_session.set_override(QuoteField.PER_VISIT, 1)
        carpet_session.edit_config({"area": {"first_block_rate": 300}})

        assert carpet_session.config_source is ConfigSource.EDITED
        assert carpet_session.config.area.first_block_rate == 300
        assert carpet_session.outputs.per_visit == 300 + 2 * 125
        assert len(carpet_session.overrides) == 0

    def test_invalid_edit_is_rejected(self, carpet_session):
        before = carpet_session.config
        with pytest.raises(ValidationError):
            carpet_session.edit_config({"perVisitMinimum": -5})
        assert carpet_session.config is before

    async def test_load_config_applies_remote_document(self, stub_source, carpet_session):
        stub_source.documents["carpetCleaning"] = {"perVisitMinimum": 600}
        await carpet_session.load_config()
        assert carpet_session.config_source is ConfigSource.REMOTE
        assert carpet_session.outputs.per_visit == 600
        assert carpet_session.outputs.minimum_applied is True

    async def test_refresh_clears_overrides(self, carpet_session):
        carpet_session.set_override(QuoteField.PER_VISIT, 1)
        await carpet_session.refresh_config()
        assert len(carpet_session.overrides) == 0
        assert carpet_session.warnings

    async def test_refresh_counts_invalidation(self, carpet_session):
        labels = {"service": "carpetCleaning"}
        before = registry.get_sample_value("override_invalidations_total", labels) or 0
        carpet_session.set_override(QuoteField.PER_VISIT, 1)
        await carpet_session.refresh_config()
        assert registry.get_sample_value("override_invalidations_total", labels) == before + 1


class TestHandoff:

    def test_payload_carries_overridden_values(self, carpet_session):
        carpet_session.update_inputs({"notes": "Back entrance"})
        carpet_session.set_override(QuoteField.CONTRACT_TOTAL, 12345.678)

        payload = carpet_session.handoff_payload()

        assert payload["service_id"] == "carpetCleaning"
        assert payload["session_id"] == carpet_session.session_id
        assert payload["quote"]["contract_total"] == 12345.68
        assert payload["quote"]["per_visit"] == 500
        assert payload["overrides"] == {"contract_total": 12345.678}
        assert payload["frequency"] == "weekly"
        assert payload["notes"] == "Back entrance"


class TestSessionStore:

    def test_create_get_delete(self, session_store, config_provider):
        session = session_store.create("saniscrub", config_provider, {"fixtureCount": 5})
        assert session_store.get(session.session_id) is session
        assert len(session_store) == 1

        assert session_store.delete(session.session_id) is True
        assert session_store.get(session.session_id) is None
        assert session_store.delete(session.session_id) is False

    def test_unknown_service(self, session_store, config_provider):
        with pytest.raises(KeyError):
            session_store.create("laundry", config_provider)


class FakeClock:

    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class TestSessionExpiry:

    @pytest.fixture
    def clock(self):
        return FakeClock()

    @pytest.fixture
    def store(self, clock):
        return SessionStore(ttl=60, accepted_ttl=10, clock=clock)

    def test_idle_session_expires(self, store, clock, config_provider):
        session = store.create("carpetCleaning", config_provider)
        clock.now += 59
        assert store.get(session.session_id) is session
        clock.now += 59
        assert store.get(session.session_id) is session
        clock.now += 60
        assert store.get(session.session_id) is None
        assert len(store) == 0

    def test_accepted_session_is_evicted_after_handoff_window(self, store, clock, config_provider):
        session = store.create("carpetCleaning", config_provider)
        store.mark_accepted(session)
        assert session.accepted is True

        clock.now += 5
        assert store.get(session.session_id) is session
        clock.now += 5
        assert store.get(session.session_id) is None

    def test_create_purges_expired_sessions(self, store, clock, config_provider):
        old = store.create("carpetCleaning", config_provider)
        store.mark_accepted(old)
        clock.now += 30
        store.create("sanipod", config_provider)
        assert len(store) == 1
        assert store.get(old.session_id) is None
