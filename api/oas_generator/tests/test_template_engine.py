"""Tests for client generation: render the Svix fixture, import it and call it."""

import datetime
import json
from collections.abc import Callable
from pathlib import Path
from types import ModuleType

import httpx
import pytest

from py_oas_generator.generator.template_engine import (
    OperationAnalyzer,
    ParameterEnumAnalyzer,
    PythonCodeGenerator,
    PythonTemplateEngine,
    SecurityAnalyzer,
    TypeAnalyzer,
)
from py_oas_generator.parser.oas_parser import OASParser, ParsedSpec
from py_oas_generator.runtime import (
    ErrorResponse,
    HttpxExecutor,
    NoContent,
    Success,
    UnauthorizedError,
)
from py_oas_generator.utils.file_utils import list_python_files

PAGE = {
    "data": [{"id": "atmpt_1", "status": "success", "timestamp": "2024-01-01T00:00:00Z"}],
    "done": True,
    "iterator": None,
}
APPLICATION = {"id": "app_1", "name": "app", "createdAt": "2024-01-01T00:00:00Z", "metadata": {}}


class FakeSvix:
    """Mock transport handler serving canned responses per method and path."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.routes = {
            ("GET", "/api/v1/app"): httpx.Response(401, json={"code": "unauthorized", "detail": "bad token"}),
            ("POST", "/api/v1/app"): httpx.Response(201, json=APPLICATION),
            ("DELETE", "/api/v1/app/app_1"): httpx.Response(204),
            ("GET", "/api/v1/app/app_1/attempt/endpoint/ep_1"): httpx.Response(200, json=PAGE),
            ("GET", "/api/v1/health"): httpx.Response(200, json={"status": "ok"}),
        }

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.routes[(request.method, request.url.path)]


@pytest.fixture
def fake_svix() -> FakeSvix:
    return FakeSvix()


@pytest.fixture
def svix_client(generate_package: Callable[..., ModuleType]) -> ModuleType:
    return generate_package()


@pytest.fixture
def client(svix_client: ModuleType, fake_svix: FakeSvix) -> object:
    executor = HttpxExecutor(httpx.Client(transport=httpx.MockTransport(fake_svix)))
    configuration = svix_client.Configuration(base_url="https://api.test")
    return svix_client.SvixClient(configuration, executor, token="testsk_1")


class TestAnalyzers:
    def test_grouping_and_names(self, svix_spec: ParsedSpec) -> None:
        groups = OperationAnalyzer.group_operations_by_tag(svix_spec.operations)

        assert list(groups) == ["Application", "Message Attempt", "default"]
        assert OperationAnalyzer.module_name("Message Attempt") == "message_attempt_api"
        assert OperationAnalyzer.resource_class("Message Attempt") == "MessageAttemptApi"
        assert OperationAnalyzer.resource_attribute("Message Attempt") == "message_attempt"
        assert OperationAnalyzer.resource_attribute("Configuration") == "configuration_api"

    def test_parameter_enums(self, svix_spec: ParsedSpec) -> None:
        enums = ParameterEnumAnalyzer.collect_parameter_enums(svix_spec.operations)

        assert list(enums) == ["V1ApplicationListOrder"]
        assert enums["V1ApplicationListOrder"]["members"] == [("ASCENDING", "ascending"), ("DESCENDING", "descending")]

    def test_parameter_enums_are_named_per_operation(self, tmp_path: Path) -> None:
        def list_operation(operation_id: str, values: list[str]) -> dict[str, object]:
            return {
                "get": {
                    "operationId": operation_id,
                    "parameters": [{"name": "status", "in": "query", "schema": {"type": "string", "enum": values}}],
                    "responses": {"204": {"description": "ok"}},
                }
            }

        spec = OASParser().parse_dict(
            {
                "openapi": "3.1.0",
                "info": {"title": "Jobs", "version": "1.0.0"},
                "paths": {"/a": list_operation("listA", ["on", "off"]), "/b": list_operation("listB", ["queued", "done"])},
            }
        )

        enums = ParameterEnumAnalyzer.collect_parameter_enums(spec.operations)
        files = PythonCodeGenerator().generate_client(spec, tmp_path, "jobs_client")
        rendered = files[tmp_path / "jobs_client" / "apis" / "parameter_enums.py"]

        assert sorted(enums) == ["ListAStatus", "ListBStatus"]
        assert [value for _, value in enums["ListBStatus"]["members"]] == ["queued", "done"]
        assert "class ListBStatus(str, enum.Enum):" in rendered
        assert '"queued"' in rendered
        assert "status: ListBStatus | str | Unset = UNSET" in files[tmp_path / "jobs_client" / "apis" / "default_api.py"]

    def test_used_types_and_auth(self, svix_spec: ParsedSpec) -> None:
        operations = OperationAnalyzer.group_operations_by_tag(svix_spec.operations)["Message Attempt"]

        assert TypeAnalyzer.get_all_used_types(operations) == [
            "ListResponseMessageAttemptEndpointOut",
            "MessageStatus",
        ]
        assert TypeAnalyzer.operations_use_datetime(operations)
        assert SecurityAnalyzer.get_used_auth(operations, svix_spec) == ["AUTH_API_KEY_HEADER", "AUTH_HTTP_BEARER"]

    def test_operation_docstring(self, svix_spec: ParsedSpec) -> None:
        operation = svix_spec.operations[0]

        assert OperationAnalyzer.operation_docstring(operation) == (
            "List Applications\n\nList of all the organization's applications."
        )


class TestRendering:
    def test_generated_files(self, svix_spec: ParsedSpec, tmp_path: Path) -> None:
        files = PythonCodeGenerator().generate_client(svix_spec, tmp_path, "svix_client")

        assert {path.relative_to(tmp_path).as_posix() for path in files} == {
            "pyproject.toml",
            "README.md",
            "svix_client/__init__.py",
            "svix_client/client.py",
            "svix_client/models.py",
            "svix_client/apis/__init__.py",
            "svix_client/apis/application_api.py",
            "svix_client/apis/message_attempt_api.py",
            "svix_client/apis/default_api.py",
            "svix_client/apis/parameter_enums.py",
            "svix_client/apis/security.py",
        }

    def test_generated_code_compiles(self, svix_spec: ParsedSpec, tmp_path: Path) -> None:
        for group_parameters in (False, True):
            output_dir = tmp_path / str(group_parameters)
            files = PythonCodeGenerator(group_parameters=group_parameters).generate_client(svix_spec, output_dir)
            for path, content in files.items():
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(content, encoding="utf-8")

            python_files = list_python_files(output_dir)
            assert len(python_files) == 9
            for path in python_files:
                compile(path.read_text(encoding="utf-8"), str(path), "exec")

    def test_request_assembly_is_rendered(self, svix_spec: ParsedSpec, tmp_path: Path) -> None:
        files = PythonCodeGenerator().generate_client(svix_spec, tmp_path, "svix_client")
        source = files[tmp_path / "svix_client" / "apis" / "message_attempt_api.py"]

        assert 'ParameterSpec("tag", Carrier.QUERY, required=True, nullable=True, is_array=True)' in source
        assert source.index("request.with_auth(AUTH_API_KEY_HEADER)") < source.index(
            "request.with_auth(AUTH_HTTP_BEARER)"
        )
        assert 'ResponseVariant("200", codecs.model(lambda: ListResponseMessageAttemptEndpointOut))' in source

    def test_project_files(self, svix_spec: ParsedSpec, tmp_path: Path) -> None:
        files = PythonCodeGenerator().generate_client(svix_spec, tmp_path, "svix_client", custom_description="Svix SDK")

        pyproject = files[tmp_path / "pyproject.toml"]
        assert 'name = "svix-client"' in pyproject
        assert 'version = "1.4.0"' in pyproject
        assert 'description = "Svix SDK"' in pyproject
        assert "client.application.v1_application_list(...)" in files[tmp_path / "README.md"]

    def test_custom_template_dir(self, tmp_path: Path) -> None:
        (tmp_path / "hello.j2").write_text("{{ 'Message Attempt' | snake_case }}", encoding="utf-8")

        engine = PythonTemplateEngine(tmp_path)

        assert engine.render_template("hello.j2", {}) == "message_attempt"


class TestGeneratedClient:
    def test_package_metadata(self, svix_client: ModuleType) -> None:
        assert svix_client.__version__ == "1.4.0"
        assert svix_client.USER_AGENT == "svix_client/1.4.0/python"
        assert svix_client.DEFAULT_BASE_URL == "https://api.eu.svix.com"

    def test_null_tag_is_sent_as_empty_value(self, client: object, fake_svix: FakeSvix) -> None:
        response = client.message_attempt.v1_message_attempt_list_by_endpoint("app_1", "ep_1", None)

        assert isinstance(response, Success)
        sent = fake_svix.requests[0]
        assert sent.url.query == b"tag="
        assert sent.headers["Authorization"] == "Bearer testsk_1"
        assert "X-Api-Key" not in sent.headers
        assert sent.headers["User-Agent"] == "svix_client/1.4.0/python"

        page = response.unwrap()
        assert page.iterator is None
        assert page.has_iterator()
        assert not page.has_prev_iterator()
        assert page.data[0].status is type(page.data[0].status).SUCCESS

    def test_optional_parameters(self, svix_client: ModuleType, client: object, fake_svix: FakeSvix) -> None:
        client.message_attempt.v1_message_attempt_list_by_endpoint(
            "app_1",
            "ep_1",
            ["a", "b"],
            status=svix_client.models.MessageStatus.FAIL,
            event_types=["created", "deleted"],
            before=datetime.datetime(2024, 5, 1, 12, 0, tzinfo=datetime.UTC),
        )

        params = fake_svix.requests[0].url.params
        assert params["tag"] == "a,b"
        assert params["status"] == "fail"
        assert params["event_types"] == "created,deleted"
        assert params["before"] == "2024-05-01T12:00:00+00:00"

    def test_declared_error(self, client: object) -> None:
        response = client.application.v1_application_list(limit=10)

        assert isinstance(response, ErrorResponse)
        assert response.data.detail == "bad token"
        with pytest.raises(UnauthorizedError):
            response.unwrap()

    def test_create_with_body(self, svix_client: ModuleType, client: object, fake_svix: FakeSvix) -> None:
        body = svix_client.models.ApplicationIn(name="app", uid=None)

        response = client.application.v1_application_create(body, idempotency_key="key-1")

        sent = fake_svix.requests[0]
        assert json.loads(sent.content) == {"name": "app", "uid": None}
        assert sent.headers["idempotency-key"] == "key-1"
        assert response.status_code == 201
        assert response.unwrap().created_at == datetime.datetime(2024, 1, 1, tzinfo=datetime.UTC)

    def test_no_content(self, client: object) -> None:
        assert client.application.v1_application_delete("app_1") == NoContent(204)

    def test_operation_without_security(self, client: object, fake_svix: FakeSvix) -> None:
        response = client.default.v1_health_get()

        assert response.unwrap().status == "ok"
        assert "Authorization" not in fake_svix.requests[0].headers

    def test_with_token_shares_executor(self, client: object) -> None:
        other = client.with_token("testsk_2")

        assert other.executor is client.executor
        assert other.configuration.access_token == "testsk_2"
        assert client.configuration.access_token == "testsk_1"

    def test_client_owns_default_executor(self, svix_client: ModuleType) -> None:
        with svix_client.SvixClient(base_url="https://api.test") as owned:
            assert owned.configuration.base_url == "https://api.test"
            assert owned.configuration.timeout == 15.0

        assert owned.executor._client.is_closed  # noqa: SLF001

    def test_generated_model_accessors(self, svix_client: ModuleType) -> None:
        models = svix_client.models
        page = models.ListResponseMessageAttemptEndpointOut(data=[], done=False, iterator="it_1", prev_iterator="it_0")

        page.set_prev_iterator_nil()
        assert page.to_dict() == {"data": [], "done": False, "iterator": "it_1", "prevIterator": None}

        page.unset_prev_iterator()
        assert "prevIterator" not in page.to_dict()

        with pytest.raises(TypeError):
            models.ListResponseMessageAttemptEndpointOut(data=[], done=False)

    def test_models_with_forward_and_self_references(self, svix_client: ModuleType) -> None:
        models = svix_client.models

        error = models.HttpValidationError.from_dict({"detail": [{"loc": ["body", "name"], "msg": "required", "type": "missing"}]})
        tree = models.TreeNode.from_dict({"name": "root", "children": [{"name": "leaf"}]})

        assert isinstance(error.detail[0], models.ValidationErrorItem)
        assert tree.children[0].name == "leaf"
        assert not tree.children[0].has("children")

    def test_single_recursive_schema(self, generate_package: Callable[..., ModuleType]) -> None:
        spec = OASParser().parse_dict(
            {
                "openapi": "3.1.0",
                "info": {"title": "Graph", "version": "1.0.0"},
                "paths": {},
                "components": {
                    "schemas": {
                        "Node": {
                            "type": "object",
                            "required": ["id"],
                            "properties": {
                                "id": {"type": "string"},
                                "children": {"type": "array", "items": {"$ref": "#/components/schemas/Node"}},
                                "byName": {"type": "object", "additionalProperties": {"$ref": "#/components/schemas/Node"}},
                            },
                        }
                    }
                },
            }
        )

        package = generate_package("graph_client", spec=spec)
        node = package.models.Node.from_dict({"id": "a", "children": [{"id": "b"}], "byName": {"c": {"id": "c"}}})

        assert node.children[0].id == "b"
        assert node.by_name["c"].id == "c"
        assert package.models.Node.from_json(node.to_json()) == node

    def test_grouped_parameters(self, generate_package: Callable[..., ModuleType], fake_svix: FakeSvix) -> None:
        package = generate_package("svix_grouped", group_parameters=True)
        from svix_grouped.apis.message_attempt_api import V1MessageAttemptListByEndpointParams

        executor = HttpxExecutor(httpx.Client(transport=httpx.MockTransport(fake_svix)))
        client = package.SvixClient(package.Configuration(base_url="https://api.test"), executor)

        response = client.message_attempt.v1_message_attempt_list_by_endpoint(
            V1MessageAttemptListByEndpointParams(app_id="app_1", endpoint_id="ep_1", tag=None)
        )

        assert isinstance(response, Success)
        assert fake_svix.requests[0].url.query == b"tag="
        assert client.default.v1_health_get().unwrap().status == "ok"
