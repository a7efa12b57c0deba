from .user import UserCreate, UserLogin, UserOut
from .tokens import AuthResponse, CurrentUserResponse
from .task import TaskCreate, TaskUpdate, TaskOut, AssigneeOut, PaginationOut, TaskListOut, MessageOut
