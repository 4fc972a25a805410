from typing import Annotated, Callable, Dict, Optional, Sequence

from fastapi import APIRouter, Depends, FastAPI, Request, Response, status
from starlette.concurrency import run_in_threadpool

from paperbook_backend.api.rate_limit import limiter
from paperbook_backend.business_logic.services import Services, get_services
from paperbook_backend.interfaces.base import EntityInterface
from paperbook_backend.interfaces.roles import Role
from paperbook_backend.permissions.auth import (
    get_current_principal,
    get_current_principal_optional,
    require_roles,
)
from paperbook_backend.permissions.principal import Principal


class CrudRouter:
    """
    Registers the standard routes of one resource kind:

        POST   /{kind}                create
        GET    /{kind}                list (X-Total-Count header)
        GET    /{kind}/{id}           get
        PATCH  /{kind}/{id}           update
        DELETE /{kind}/{id}           delete
        PUT    /{kind}/{id}/disable   disable
        PUT    /{kind}/{id}/enable    enable

    plus any related listings added with `add_related`.

    Args:
        dto: EntityInterface of the kind
        endpoint: URL prefix, defaults to `dto.endpoint`
        roles: Route name -> roles admitted on that route; routes not listed
            admit every authenticated caller
        public: Route names reachable without credentials
        rate_limits: Route name -> slowapi limit string
    """

    id_type = "id"

    path: str
    dto: EntityInterface

    def __init__(
        self,
        dto,
        endpoint: Optional[str] = None,
        roles: Optional[Dict[str, Sequence[Role]]] = None,
        public: Sequence[str] = (),
        rate_limits: Optional[Dict[str, str]] = None,
    ):
        self.dto = dto
        if endpoint is None:
            self.path = self.dto.endpoint
        else:
            self.path = endpoint

        self.roles = roles or {}
        self.public = set(public)
        self.rate_limits = rate_limits or {}

        self.router = APIRouter()
        self.related = []

    def principal_dependency(self, route_name: str) -> Callable:
        if route_name in self.roles:
            return require_roles(*self.roles[route_name])
        if route_name in self.public:
            return get_current_principal_optional
        return get_current_principal

    def service(self, services: Services):
        return services.for_endpoint(self.dto.endpoint)

    def create(self):
        async def route(
                request: Request,
                permissions: Annotated[Optional[Principal], Depends(self.principal_dependency("create"))],
                entity: self.dto.create,
                services: Annotated[Services, Depends(get_services)],
        ) -> self.dto.get:
            def _create_entity():
                created = self.service(services).create(entity, permissions)
                return self.dto.get.model_validate(created, from_attributes=True)

            return await run_in_threadpool(_create_entity)

        if "create" in self.rate_limits:
            route = limiter.limit(self.rate_limits["create"])(route)
        return route

    def get(self):
        async def route(
                permissions: Annotated[Optional[Principal], Depends(self.principal_dependency("get"))],
                id: int,
                services: Annotated[Services, Depends(get_services)],
        ) -> self.dto.get:
            def _get_entity():
                item = self.service(services).get(id, permissions)
                return self.dto.get.model_validate(item, from_attributes=True)

            return await run_in_threadpool(_get_entity)
        return route

    def list(self):
        async def route(
                permissions: Annotated[Optional[Principal], Depends(self.principal_dependency("list"))],
                response: Response,
                params: Annotated[self.dto.query, Depends()],
                services: Annotated[Services, Depends(get_services)],
        ) -> list[self.dto.list]:
            def _list_entities():
                items, total = self.service(services).list(permissions, params)
                return [self.dto.list.model_validate(item, from_attributes=True) for item in items], total

            list_result, total = await run_in_threadpool(_list_entities)
            response.headers["X-Total-Count"] = str(total)
            return list_result
        return route

    def update(self):
        async def route(
                permissions: Annotated[Principal, Depends(self.principal_dependency("update"))],
                id: int,
                entity: self.dto.update,
                services: Annotated[Services, Depends(get_services)],
        ) -> self.dto.get:
            def _update_entity():
                updated = self.service(services).update(id, permissions, entity)
                return self.dto.get.model_validate(updated, from_attributes=True)

            return await run_in_threadpool(_update_entity)
        return route

    def delete(self):
        async def route(
                permissions: Annotated[Principal, Depends(self.principal_dependency("delete"))],
                id: int,
                services: Annotated[Services, Depends(get_services)],
        ):
            await run_in_threadpool(self.service(services).delete, id, permissions)
        return route

    def disable(self):
        async def route(
                permissions: Annotated[Principal, Depends(self.principal_dependency("disable"))],
                id: int,
                services: Annotated[Services, Depends(get_services)],
        ):
            await run_in_threadpool(self.service(services).disable, id, permissions)
        return route

    def enable(self):
        async def route(
                permissions: Annotated[Principal, Depends(self.principal_dependency("enable"))],
                id: int,
                services: Annotated[Services, Depends(get_services)],
        ):
            await run_in_threadpool(self.service(services).enable, id, permissions)
        return route

    def add_related(self, relation: str, related_dto: EntityInterface, public: bool = False):
        """Register `GET /{kind}/{id}/{relation}` listing the children of one resource."""

        principal_dependency = get_current_principal_optional if public else get_current_principal

        async def route(
                permissions: Annotated[Optional[Principal], Depends(principal_dependency)],
                id: int,
                response: Response,
                params: Annotated[related_dto.query, Depends()],
                services: Annotated[Services, Depends(get_services)],
        ) -> list[related_dto.list]:
            def _list_related():
                items, total = self.service(services).get_related(id, relation, permissions, params)
                return [related_dto.list.model_validate(item, from_attributes=True) for item in items], total

            list_result, total = await run_in_threadpool(_list_related)
            response.headers["X-Total-Count"] = str(total)
            return list_result

        self.related.append((relation, route))
        return self

    def register_routes(self, app: FastAPI):

        scope_name = self.path.replace("/", "").replace("-", " ")

        self.router.add_api_route("", self.create(), methods=["POST"],
                    status_code=status.HTTP_201_CREATED, name=f"create {scope_name}")
        self.router.add_api_route("", self.list(), methods=["GET"],
                    status_code=status.HTTP_200_OK, name=f"list {scope_name}")
        self.router.add_api_route(f"/{{{CrudRouter.id_type}}}", self.get(), methods=["GET"],
                    status_code=status.HTTP_200_OK, name=f"get {scope_name}")
        self.router.add_api_route(f"/{{{CrudRouter.id_type}}}", self.update(), methods=["PATCH"],
                    status_code=status.HTTP_200_OK, name=f"update {scope_name}")
        self.router.add_api_route(f"/{{{CrudRouter.id_type}}}", self.delete(), methods=["DELETE"],
                    status_code=status.HTTP_204_NO_CONTENT, name=f"delete {scope_name}")
        self.router.add_api_route(f"/{{{CrudRouter.id_type}}}/disable", self.disable(), methods=["PUT"],
                    status_code=status.HTTP_204_NO_CONTENT, name=f"disable {scope_name}")
        self.router.add_api_route(f"/{{{CrudRouter.id_type}}}/enable", self.enable(), methods=["PUT"],
                    status_code=status.HTTP_204_NO_CONTENT, name=f"enable {scope_name}")

        for relation, route in self.related:
            self.router.add_api_route(f"/{{{CrudRouter.id_type}}}/{relation}", route, methods=["GET"],
                    status_code=status.HTTP_200_OK, name=f"list {scope_name} {relation.replace('-', ' ')}")

        app.include_router(
            self.router,
            prefix=f"/{self.path}",
            tags=[scope_name]
        )

        return self
