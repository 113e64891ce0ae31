"""
CRUD router shared by every resource.

For a resource ``E`` mounted under /api:

    POST   /E          create            201 | 400
    PUT    /E/{id}     full replace      200 | 400 | 409
    PATCH  /E/{id}     merge-patch       200 | 400 | 404 | 409
    GET    /E          paged list        200 + X-Total-Count, Link
    GET    /E/{id}     one entity        200 | 404
    DELETE /E/{id}     delete            204 | 404 | 409

PUT reports an unknown id as 400; PATCH reports it as 404.
"""

from typing import List

from fastapi import APIRouter, Depends, Query, Request, Response

from api.headers import parse_sort, pagination_headers, alert_headers
from config.settings import get_default_page_size, get_max_page_size
from constants import AlertAction, HTTPStatus
from dependencies import entity_service_provider
from dtos.internal import Page, PageRequest
from services.entity_service import EntityService
from services.resources import Resource
from utils.error_handlers import handle_api_errors
from utils.logging_utils import set_logging_context

DEFAULT_PAGE_SIZE = get_default_page_size()
MAX_PAGE_SIZE = get_max_page_size()


def entity_router(resource: Resource, eager_option: bool = False) -> APIRouter:
    """
    Build the CRUD router of one resource.

    Args:
        resource: Resource descriptor
        eager_option: Accept ``eagerload`` on the collection GET

    Returns:
        APIRouter to include under the /api prefix
    """
    router = APIRouter()
    provider = entity_service_provider(resource)
    request_dto = resource.request_dto
    response_dto = resource.response_dto
    label = resource.entity_name
    path = f"/{resource.name}"

    def render(entity):
        return response_dto.model_validate(entity)

    def list_page(request: Request, response: Response, service: EntityService,
                  page: int, size: int, sort: List[str], eager: bool):
        set_logging_context(resource=resource.name)
        page_request = PageRequest(page=page, size=size, sort=parse_sort(sort))
        if eager:
            items, total = service.find_all_eager(page_request)
        else:
            items, total = service.find_all(page_request)
        response.headers.update(pagination_headers(request.url, Page(items, total, page_request)))
        return [render(item) for item in items]

    @router.post(path, response_model=response_dto, status_code=HTTPStatus.CREATED)
    @handle_api_errors(f"Create {label}")
    def create_entity(dto: request_dto, response: Response, service: EntityService = Depends(provider)):
        """Create an entity; the body must not carry an id."""
        entity = service.create(dto)
        response.headers["Location"] = f"/api/{resource.name}/{entity.id}"
        response.headers.update(alert_headers(AlertAction.CREATED, resource.alert_name, entity.id))
        return render(entity)

    @router.put(path + "/{id}", response_model=response_dto)
    @handle_api_errors(f"Update {label}", not_found_status=HTTPStatus.BAD_REQUEST)
    def replace_entity(id: int, dto: request_dto, response: Response, service: EntityService = Depends(provider)):
        """Replace every field of an entity; omitted fields become null."""
        entity = service.replace(id, dto)
        response.headers.update(alert_headers(AlertAction.UPDATED, resource.alert_name, entity.id))
        return render(entity)

    @router.patch(path + "/{id}", response_model=response_dto)
    @handle_api_errors(f"Partial update {label}")
    def patch_entity(id: int, dto: request_dto, response: Response, service: EntityService = Depends(provider)):
        """Merge-patch an entity (application/json or application/merge-patch+json)."""
        entity = service.partial_update(id, dto)
        response.headers.update(alert_headers(AlertAction.UPDATED, resource.alert_name, entity.id))
        return render(entity)

    if eager_option:
        @router.get(path, response_model=List[response_dto])
        @handle_api_errors(f"List {label}")
        def list_entities(
            request: Request,
            response: Response,
            page: int = Query(0, ge=0),
            size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
            sort: List[str] = Query([], description="field,asc|desc; repeatable"),
            eagerload: bool = Query(True, description="Join singular associations into the query"),
            service: EntityService = Depends(provider),
        ):
            """Paginated list, optionally loading associations in the same query."""
            return list_page(request, response, service, page, size, sort, eagerload)
    else:
        @router.get(path, response_model=List[response_dto])
        @handle_api_errors(f"List {label}")
        def list_entities(
            request: Request,
            response: Response,
            page: int = Query(0, ge=0),
            size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
            sort: List[str] = Query([], description="field,asc|desc; repeatable"),
            service: EntityService = Depends(provider),
        ):
            """Paginated list."""
            return list_page(request, response, service, page, size, sort, False)

    @router.get(path + "/{id}", response_model=response_dto)
    @handle_api_errors(f"Get {label}")
    def get_entity(id: int, service: EntityService = Depends(provider)):
        return render(service.find_one(id))

    @router.delete(path + "/{id}", status_code=HTTPStatus.NO_CONTENT)
    @handle_api_errors(f"Delete {label}")
    def delete_entity(id: int, service: EntityService = Depends(provider)):
        """Delete an entity; refused with 409 while others depend on it unless cascading."""
        service.delete(id)
        return Response(
            status_code=HTTPStatus.NO_CONTENT,
            headers=alert_headers(AlertAction.DELETED, resource.alert_name, id),
        )

    return router
