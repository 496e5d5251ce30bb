"""
HTTP surface of the Library System API.

One ``APIRouter`` per resource; ``create_app`` mounts them all under the
configured prefix (``/api/Library`` by default).
"""

from .authors import router as authors_router
from .books import router as books_router
from .courses import router as courses_router
from .errors import install_error_handlers
from .fines import router as fines_router
from .loans import router as loans_router
from .members import router as members_router
from .membership_types import router as membership_types_router
from .users import router as users_router

routers = [
    authors_router,
    books_router,
    courses_router,
    fines_router,
    loans_router,
    members_router,
    membership_types_router,
    users_router,
]

__all__ = ["install_error_handlers", "routers"]
