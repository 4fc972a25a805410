"""
Tests for the enable/disable lifecycle guard.
"""

from types import SimpleNamespace

import pytest

from paperbook_backend.business_logic.lifecycle import (
    require_active,
    require_disableable,
    require_enableable,
)
from paperbook_backend.exceptions import (
    EntityAlreadyDisabledException,
    EntityAlreadyEnabledException,
    NotFoundException,
)

ACTIVE = SimpleNamespace(id=1, is_active=True)
INACTIVE = SimpleNamespace(id=1, is_active=False)


@pytest.mark.unit
class TestLifecycleGuard:

    def test_require_active_passes_active(self):
        assert require_active(ACTIVE, 1, "Address") is ACTIVE

    @pytest.mark.parametrize("resource", [None, INACTIVE])
    def test_require_active_hides_missing_and_inactive(self, resource):
        with pytest.raises(NotFoundException) as exc_info:
            require_active(resource, 1, "Address")

        assert exc_info.value.status_code == 404
        assert exc_info.value.error_code == "NF_001"
        assert "'1' of type 'Address'" in exc_info.value.detail

    def test_disable_active(self):
        assert require_disableable(ACTIVE, 1, "Order") is ACTIVE

    def test_disable_inactive_conflicts(self):
        with pytest.raises(EntityAlreadyDisabledException) as exc_info:
            require_disableable(INACTIVE, 1, "Order")

        assert exc_info.value.status_code == 409
        assert exc_info.value.error_code == "CONFLICT_002"

    def test_disable_missing(self):
        with pytest.raises(NotFoundException):
            require_disableable(None, 1, "Order")

    def test_enable_inactive(self):
        assert require_enableable(INACTIVE, 1, "Order") is INACTIVE

    def test_enable_active_conflicts(self):
        with pytest.raises(EntityAlreadyEnabledException) as exc_info:
            require_enableable(ACTIVE, 1, "Order")

        assert exc_info.value.status_code == 409
        assert exc_info.value.error_code == "CONFLICT_003"

    def test_enable_missing(self):
        with pytest.raises(NotFoundException):
            require_enableable(None, 1, "Order")
