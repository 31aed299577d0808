"""Role names used as Django auth groups."""

ROLE_CUSTOMER = "Customer"
ROLE_COMPANY = "Company"
ROLE_ADMIN = "Admin"
ROLE_EMPLOYEE = "Employee"

ALL_ROLES = (ROLE_CUSTOMER, ROLE_COMPANY, ROLE_ADMIN, ROLE_EMPLOYEE)

# Roles allowed to manage every order
ORDER_MANAGER_ROLES = (ROLE_ADMIN, ROLE_EMPLOYEE)
