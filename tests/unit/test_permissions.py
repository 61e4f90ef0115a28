import pytest
from gelato_ops.auth.permissions import PermissionChecker
from gelato_ops.core.exceptions import PermissionDeniedError


class TestPermissionChecker:
    def test_direct_permission(self):
        checker = PermissionChecker(["stocktakes:read"])
        assert checker.can("stocktakes", "read")
        assert checker.cannot("stocktakes", "create")

    def test_resource_admin_grants_every_action(self):
        checker = PermissionChecker(["orders:admin"])
        assert checker.can("orders", "update")
        assert checker.cannot("stocktakes", "read")

    def test_system_admin_grants_everything(self):
        assert PermissionChecker(["system:admin"]).can("audit", "read")

    def test_dict_entries_are_accepted(self):
        checker = PermissionChecker([{"resource": "items", "action": "create"}, "malformed"])
        assert checker.permissions == ["items:create"]

    def test_require_raises_403(self):
        with pytest.raises(PermissionDeniedError) as exc_info:
            PermissionChecker([]).require("deliveries", "read")
        assert exc_info.value.status_code == 403
