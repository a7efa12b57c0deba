from .api import ApiError, TaskTrackerClient
from .dashboards import AdminDashboard, EmployeeDashboard, LoginScreen
