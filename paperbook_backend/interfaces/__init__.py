from paperbook_backend.interfaces.base import BaseEntityGet, BaseEntityList, EntityInterface, ListQuery
from paperbook_backend.interfaces.roles import Role, CATALOG_MANAGERS
from paperbook_backend.interfaces.user import (
    UserCreate, UserGet, UserList, UserUpdate, UserQuery, UserInterface,
)
from paperbook_backend.interfaces.address import (
    AddressCreate, AddressGet, AddressList, AddressUpdate, AddressQuery, AddressInterface,
)
from paperbook_backend.interfaces.product import (
    ProductCreate, ProductGet, ProductList, ProductUpdate, ProductQuery, ProductInterface,
)
from paperbook_backend.interfaces.order import (
    OrderStatus, OrderCreate, OrderGet, OrderList, OrderUpdate, OrderQuery, OrderInterface,
)
from paperbook_backend.interfaces.rating import (
    RatingCreate, RatingGet, RatingList, RatingUpdate, RatingQuery, RatingInterface,
)
from paperbook_backend.interfaces.shopping_cart import (
    CartItem,
    ShoppingCartCreate, ShoppingCartGet, ShoppingCartList, ShoppingCartUpdate, ShoppingCartQuery, ShoppingCartInterface,
    ProductGroupCreate, ProductGroupGet, ProductGroupList, ProductGroupUpdate, ProductGroupQuery, ProductGroupInterface,
)
