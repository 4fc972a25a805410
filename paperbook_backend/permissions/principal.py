from pydantic import BaseModel, ConfigDict

from paperbook_backend.interfaces.roles import Role


class Principal(BaseModel):
    """The authenticated caller: who they are and which role they act in."""

    user_id: int
    role: Role = Role.user

    model_config = ConfigDict(frozen=True)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.admin

    def has_role(self, *roles: Role) -> bool:
        return self.role in roles

    def __str__(self) -> str:
        return f"{self.role.value}:{self.user_id}"


def principal_from_user(user) -> Principal:
    return Principal(user_id=user.id, role=Role(user.role))
