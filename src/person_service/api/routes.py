"""``/persons`` routes."""

from enum import Enum
from typing import Annotated, TypeVar

from fastapi import APIRouter, Query, Request, Response, status

from ..domain.enums import Color, Country
from ..domain.exceptions import PersonNotFoundError, PersonValidationError, ValidationSource
from ..filtering.coercion import coerce_enum
from ..filtering.exceptions import CoercionError
from .dependencies import ServiceDep
from .schemas import PersonRequest, PersonResponse

E = TypeVar("E", bound=Enum)

router = APIRouter(prefix="/persons", tags=["persons"])


def enum_param(raw: str, enum_type: type[E], name: str) -> E:
    """Case-insensitive enum path/query parameter; bad values are a 400."""
    try:
        return coerce_enum(raw, enum_type)  # type: ignore[return-value]
    except CoercionError as e:
        allowed = ", ".join(m.name for m in enum_type)
        raise PersonValidationError(
            {name: [f"Invalid value '{raw}'. Allowed: {allowed}"]},
            source=ValidationSource.URL_PARAMETER,
        ) from e


def first_values(request: Request) -> dict[str, str]:
    """Query params with the first value kept for repeated keys."""
    params: dict[str, str] = {}
    for key, value in request.query_params.multi_items():
        params.setdefault(key, value)
    return params


# -- collection ---------------------------------------------------------------


@router.get("", response_model=list[PersonResponse])
async def list_persons(
    request: Request,
    response: Response,
    service: ServiceDep,
    page: Annotated[str | None, Query(description="Page number (0-based)")] = None,
    size: Annotated[str | None, Query(description="Page size")] = None,
    sort_by: Annotated[str | None, Query(alias="sortBy")] = None,
    sort_direction: Annotated[str | None, Query(alias="sortDirection")] = None,
) -> list[PersonResponse]:
    """
    List persons with filters and paging.

    Any other query parameter is a filter: ``field=value`` or
    ``field[op]=value`` with ``op`` one of eq, ne, gt, gte, lt, lte, like.
    """
    params = first_values(request)
    result = await service.find_all_with_filters(params, service.page_request(params))
    response.headers.update(result.headers())
    return [PersonResponse.from_person(p) for p in result.items]


@router.post("", response_model=PersonResponse, status_code=status.HTTP_201_CREATED)
async def create_person(body: PersonRequest, service: ServiceDep) -> PersonResponse:
    person = await service.save(body.to_data())
    return PersonResponse.from_person(person)


@router.get("/count")
async def count_persons(service: ServiceDep) -> int:
    return await service.count()


@router.get("/exists/{person_id}")
async def person_exists(person_id: int, service: ServiceDep) -> bool:
    return await service.exists_by_id(person_id)


# -- special operations -------------------------------------------------------


@router.delete("/hair-color/{hair_color}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_by_hair_color(hair_color: str, service: ServiceDep) -> Response:
    await service.delete_by_hair_color(enum_param(hair_color, Color, "hairColor"))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/max-name", response_model=PersonResponse)
async def person_with_max_name(service: ServiceDep) -> PersonResponse:
    person = await service.find_person_with_max_name()
    if person is None:
        raise PersonNotFoundError(message="No persons found")
    return PersonResponse.from_person(person)


@router.get("/nationality-less-than/{nationality}", response_model=list[PersonResponse])
async def nationality_less_than(
    nationality: str, service: ServiceDep
) -> list[PersonResponse]:
    persons = await service.find_by_nationality_less_than(
        enum_param(nationality, Country, "nationality")
    )
    return [PersonResponse.from_person(p) for p in persons]


@router.get("/statistics/hair-color")
async def hair_color_statistics(service: ServiceDep) -> dict[str, int]:
    stats = await service.get_hair_color_statistics()
    return {color.name: count for color, count in stats.items()}


@router.get("/statistics/nationality")
async def nationality_statistics(service: ServiceDep) -> dict[str, int]:
    stats = await service.get_nationality_statistics()
    return {country.name: count for country, count in stats.items()}


@router.get("/statistics/hair-color-percentage/{hair_color}")
async def hair_color_percentage(hair_color: str, service: ServiceDep) -> float:
    return await service.calculate_hair_color_percentage(
        enum_param(hair_color, Color, "hairColor")
    )


@router.get("/statistics/nationality-eye-color")
async def nationality_eye_color_count(
    service: ServiceDep,
    nationality: Annotated[str, Query()],
    eye_color: Annotated[str, Query(alias="eyeColor")],
) -> int:
    return await service.calculate_nationality_eye_color_count(
        enum_param(nationality, Country, "nationality"),
        enum_param(eye_color, Color, "eyeColor"),
    )


# -- single resource ----------------------------------------------------------


@router.get("/{person_id}", response_model=PersonResponse)
async def get_person(person_id: int, service: ServiceDep) -> PersonResponse:
    return PersonResponse.from_person(await service.find_by_id(person_id))


@router.put("/{person_id}", response_model=PersonResponse)
async def update_person(
    person_id: int, body: PersonRequest, service: ServiceDep
) -> PersonResponse:
    person = await service.update(person_id, body.to_data())
    return PersonResponse.from_person(person)


@router.delete("/{person_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_person(person_id: int, service: ServiceDep) -> Response:
    await service.delete_by_id(person_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
