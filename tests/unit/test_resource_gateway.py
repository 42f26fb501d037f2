"""Unit tests for the HTTP resource gateway."""

import json

import httpx
import pytest

from admin_console.application.resources import RIDES, USERS
from admin_console.application.schemas import RideUpdate
from admin_console.domain.entities import Ride, User
from admin_console.domain.exceptions import (
    NotFoundError,
    ResponseFormatError,
    ServerStatusError,
    ValidationError,
)
from admin_console.infrastructure.api import ApiClient, HttpResourceGateway


# ── Helpers ──


def _user_json(user_id: int, name: str = "Ana Torres") -> dict:
    return {
        "id": user_id,
        "nombre": name,
        "rol": "admin",
        "fechaCreacion": "2024-05-01T14:30:00",
    }


def _ride_json(ride_id: int) -> dict:
    return {
        "id": ride_id,
        "cliente": "Laura Gómez",
        "taxi": "ABC123",
        "taxista": "Pedro Ruiz",
        "kilometros": 7.5,
        "barrioInicio": "Chapinero",
        "barrioLlegada": "Usaquén",
        "cantidadPasajeros": 2,
        "precio": 18500.0,
        "duracionMinutos": 25,
        "fechaCreacion": "2024-05-01T15:00:00",
    }


class RecordingHandler:
    """MockTransport handler returning queued responses and recording requests."""

    def __init__(self, *responses: httpx.Response):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responses.pop(0)

    def body(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


def _gateway(descriptor, handler: RecordingHandler) -> HttpResourceGateway:
    api_client = ApiClient(
        "http://test/api",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )
    return HttpResourceGateway(descriptor, api_client)


def _ok(data, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json={"ok": True, "data": data})


# ── list ──


@pytest.mark.asyncio
async def test_list_returns_entities_in_server_order():
    handler = RecordingHandler(_ok({"usuarios": [_user_json(7, "Zoe"), _user_json(2, "Ana")]}))
    gateway = _gateway(USERS, handler)

    users = await gateway.list()

    assert users == [
        User(id=7, name="Zoe", role="admin", created_at="2024-05-01T14:30:00"),
        User(id=2, name="Ana", role="admin", created_at="2024-05-01T14:30:00"),
    ]
    assert handler.requests[0].method == "GET"
    assert handler.requests[0].url.path == "/api/usuarios"


@pytest.mark.asyncio
async def test_list_uses_collection_key_of_record_type():
    handler = RecordingHandler(_ok({"carreras": [_ride_json(1)]}))
    gateway = _gateway(RIDES, handler)

    rides = await gateway.list()

    assert len(rides) == 1
    assert isinstance(rides[0], Ride)
    assert rides[0].plate == "ABC123"
    assert rides[0].distance_km == 7.5
    assert handler.requests[0].url.path == "/api/carreras-taxi"


@pytest.mark.asyncio
async def test_list_without_collection_key_is_empty():
    gateway = _gateway(USERS, RecordingHandler(_ok({})))

    assert await gateway.list() == []


@pytest.mark.asyncio
async def test_list_never_returns_partial_results():
    broken = {"id": 3, "rol": "admin"}  # no name
    handler = RecordingHandler(_ok({"usuarios": [_user_json(1), broken]}))
    gateway = _gateway(USERS, handler)

    with pytest.raises(ResponseFormatError):
        await gateway.list()


@pytest.mark.asyncio
async def test_list_rejects_non_list_collection():
    gateway = _gateway(USERS, RecordingHandler(_ok({"usuarios": "nope"})))

    with pytest.raises(ResponseFormatError):
        await gateway.list()


@pytest.mark.asyncio
async def test_list_propagates_server_errors():
    handler = RecordingHandler(httpx.Response(503, json={"ok": False, "data": "Mantenimiento"}))
    gateway = _gateway(RIDES, handler)

    with pytest.raises(ServerStatusError):
        await gateway.list()


# ── get_one ──


@pytest.mark.asyncio
async def test_get_one_returns_entity():
    handler = RecordingHandler(_ok(_user_json(4)))
    gateway = _gateway(USERS, handler)

    user = await gateway.get_one(4)

    assert user.id == 4
    assert handler.requests[0].url.path == "/api/usuarios/4"


@pytest.mark.asyncio
async def test_get_one_missing_raises_not_found():
    handler = RecordingHandler(httpx.Response(404, json={"ok": False, "data": "No existe"}))
    gateway = _gateway(USERS, handler)

    with pytest.raises(NotFoundError) as exc_info:
        await gateway.get_one(99)

    assert exc_info.value.entity_type == "User"
    assert exc_info.value.entity_id == 99
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_get_one_other_errors_are_not_not_found():
    handler = RecordingHandler(httpx.Response(500, json={"ok": False, "data": "boom"}))
    gateway = _gateway(USERS, handler)

    with pytest.raises(ServerStatusError) as exc_info:
        await gateway.get_one(1)

    assert not isinstance(exc_info.value, NotFoundError)


# ── create / update ──


@pytest.mark.asyncio
async def test_create_posts_wire_fields_without_identifier():
    handler = RecordingHandler(_ok(_user_json(12), status_code=201))
    gateway = _gateway(USERS, handler)

    user = await gateway.create({"nombre": " Ana Torres ", "rol": "admin", "clave": "s3cret-pass"})

    assert user.id == 12
    assert user.created_at == "2024-05-01T14:30:00"
    assert handler.requests[0].method == "POST"
    assert handler.requests[0].url.path == "/api/usuarios"
    assert handler.body() == {"nombre": "Ana Torres", "rol": "admin", "clave": "s3cret-pass"}


@pytest.mark.asyncio
async def test_create_with_invalid_mapping_never_hits_the_network():
    handler = RecordingHandler()
    gateway = _gateway(RIDES, handler)

    with pytest.raises(ValidationError) as exc_info:
        await gateway.create({"cliente": "Laura", "taxi": "ab123"})

    assert "taxi" in exc_info.value.errors
    assert handler.requests == []


@pytest.mark.asyncio
async def test_update_omits_blank_credential():
    handler = RecordingHandler(_ok(_user_json(3, "Ana María")))
    gateway = _gateway(USERS, handler)

    user = await gateway.update(3, {"nombre": "Ana María", "rol": "admin", "clave": ""})

    assert user.name == "Ana María"
    assert handler.requests[0].method == "PUT"
    assert handler.requests[0].url.path == "/api/usuarios/3"
    assert handler.body() == {"nombre": "Ana María", "rol": "admin"}


@pytest.mark.asyncio
async def test_update_accepts_validated_schema():
    ride = _ride_json(5)
    handler = RecordingHandler(_ok(ride))
    gateway = _gateway(RIDES, handler)
    data = RideUpdate.model_validate({k: v for k, v in ride.items() if k not in ("id", "fechaCreacion")})

    updated = await gateway.update(5, data)

    assert updated.id == 5
    body = handler.body()
    assert "id" not in body
    assert "fechaCreacion" not in body
    assert body["taxi"] == "ABC123"
    assert body["cantidadPasajeros"] == 2


@pytest.mark.asyncio
async def test_update_missing_record_raises_not_found():
    handler = RecordingHandler(httpx.Response(404, json={"ok": False, "data": "No existe"}))
    gateway = _gateway(USERS, handler)

    with pytest.raises(NotFoundError):
        await gateway.update(8, {"nombre": "Ana", "rol": "admin"})


@pytest.mark.asyncio
async def test_malformed_write_response_is_a_format_error():
    handler = RecordingHandler(_ok("Usuario creado"))
    gateway = _gateway(USERS, handler)

    with pytest.raises(ResponseFormatError):
        await gateway.create({"nombre": "Ana", "rol": "admin", "clave": "123456"})


# ── delete ──


@pytest.mark.asyncio
async def test_delete_sends_delete_request():
    handler = RecordingHandler(httpx.Response(204))
    gateway = _gateway(RIDES, handler)

    assert await gateway.delete(5) is None
    assert handler.requests[0].method == "DELETE"
    assert handler.requests[0].url.path == "/api/carreras-taxi/5"


@pytest.mark.asyncio
async def test_delete_of_missing_record_is_not_an_error():
    handler = RecordingHandler(httpx.Response(404, json={"ok": False, "data": "No existe"}))
    gateway = _gateway(RIDES, handler)

    await gateway.delete(5)


@pytest.mark.asyncio
async def test_delete_server_error_propagates():
    handler = RecordingHandler(httpx.Response(409, json={"ok": False, "data": "En uso"}))
    gateway = _gateway(USERS, handler)

    with pytest.raises(ServerStatusError) as exc_info:
        await gateway.delete(1)

    assert exc_info.value.status_code == 409
