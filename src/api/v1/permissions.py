"""Role-based DRF permissions for the finance API."""
from rest_framework.permissions import SAFE_METHODS, BasePermission


class _RolePermission(BasePermission):
    """Delegate to a boolean role helper on ``accounts.User``."""

    user_flag = None
    message = "Anda tidak memiliki akses ke fitur ini."

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return bool(getattr(user, self.user_flag, False))


class IsFinanceStaff(_RolePermission):
    """Finance screens: super admin, admin and finance admin."""
    user_flag = "is_finance_staff"


class CanManagePayroll(_RolePermission):
    """Mark bonuses as paid and edit admin targets (super admin, finance admin)."""
    user_flag = "can_manage_payroll"
    message = "Hanya super admin atau admin keuangan yang dapat mengubah data gaji."


class CanManagePayrollOrReadOnly(CanManagePayroll):
    """Reads for every finance staff member, writes for payroll managers."""

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return IsFinanceStaff().has_permission(request, view)
        return super().has_permission(request, view)
