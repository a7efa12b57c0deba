from .user_store import UserStore
from .task_store import TaskStore
