from .supplier import Supplier
from .carrier import Carrier
from .destination import Destination
from .container_type import ContainerType
from .order import Order, OrderStatus
from .order_document import OrderDocument
from .user import User, UserRole
from .auth_session import AuthSession
