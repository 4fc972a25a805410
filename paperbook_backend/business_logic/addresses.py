"""Business logic for addresses."""

from paperbook_backend.business_logic.resources import ResourceService
from paperbook_backend.interfaces.address import AddressInterface
from paperbook_backend.model.address import Address


class AddressService(ResourceService[Address]):
    interface = AddressInterface
