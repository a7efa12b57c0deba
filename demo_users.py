"""Demo accounts used by seed_all.py"""

from tasktracker.models.user import UserRole

DEMO_USERS = [
    {
        "name": "Admin User",
        "email": "admin@example.com",
        "password": "admin123",
        "role": UserRole.ADMIN,
    },
    {
        "name": "John Doe",
        "email": "john@example.com",
        "password": "emp123",
        "role": UserRole.EMPLOYEE,
    },
    {
        "name": "Jane Smith",
        "email": "jane@example.com",
        "password": "emp123",
        "role": UserRole.EMPLOYEE,
    },
]
