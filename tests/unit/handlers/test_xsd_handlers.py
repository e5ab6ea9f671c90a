#!/usr/bin/env python3

import os
from unittest.mock import patch

import defusedxml.ElementTree as ET
import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from graph_xsd_api.handlers.xsd import handle_schema_tree, handle_xsd_generation, schema_filename
from graph_xsd_api.main import app
from graph_xsd_api.models.models import GenerateOptions
from graph_xsd_api.services.domain.xsd import SchemaNode
from tests.utils.factories import GenerateRequestFactory, PropertyNodeFactory

XS = "{http://www.w3.org/2001/XMLSchema}"
AUTH = {"Authorization": "Bearer devtoken"}


class TestXsdHandlers:
    """Test suite for XSD handler functions"""

    def test_handle_xsd_generation_success(self):
        request = GenerateRequestFactory()

        content, filename = handle_xsd_generation(request)

        assert filename == "Person.xsd"
        root = ET.fromstring(content.encode("utf-8"))
        assert root.find(f"{XS}element").get("name") == "Person"

    def test_handle_schema_tree(self):
        request = GenerateRequestFactory()

        tree = handle_schema_tree(request)

        schema = tree["xs:schema"]
        assert schema["xs:element"] == [{"$": {"name": "Person", "type": request.root_class_id}}]
        assert schema["xs:complexType"][0]["$"] == {"name": request.root_class_id}

    def test_missing_root_maps_to_404(self):
        request = GenerateRequestFactory()
        request.root_class_id = "o/tests/request/class/unknown"

        with pytest.raises(HTTPException) as exc_info:
            handle_xsd_generation(request)

        assert exc_info.value.status_code == 404
        assert exc_info.value.detail["error"] == "reference_not_found"
        assert exc_info.value.detail["identifier"] == "o/tests/request/class/unknown"

    def test_unknown_range_type_maps_to_422(self):
        request = GenerateRequestFactory()
        request.graph[1]["range"] = {"type": "Whatever"}

        with pytest.raises(HTTPException) as exc_info:
            handle_xsd_generation(request)

        assert exc_info.value.status_code == 422
        assert exc_info.value.detail["error"] == "unsupported_range_type"
        assert "Whatever" in exc_info.value.detail["message"]

    def test_cyclic_hierarchy_maps_to_422(self):
        request = GenerateRequestFactory()
        request.graph[0]["subClassOf"] = request.root_class_id

        with pytest.raises(HTTPException) as exc_info:
            handle_xsd_generation(request)

        assert exc_info.value.status_code == 422
        assert exc_info.value.detail["error"] == "malformed_hierarchy"

    def test_linked_class_without_ref_maps_to_422(self):
        request = GenerateRequestFactory()
        request.graph[1]["range"] = {"type": "LinkedClass"}

        with pytest.raises(HTTPException) as exc_info:
            handle_xsd_generation(request)

        assert exc_info.value.status_code == 422
        assert exc_info.value.detail["error"] == "malformed_node"
        assert exc_info.value.detail["identifier"] == "o/tests/request/property/name"

    def test_self_containing_nested_object_maps_to_422(self):
        request = GenerateRequestFactory()
        request.graph[1]["range"] = {
            "type": "NestedObject",
            "propertyRefs": [{"ref": "o/tests/request/property/name"}],
        }

        with pytest.raises(HTTPException) as exc_info:
            handle_xsd_generation(request)

        assert exc_info.value.status_code == 422
        assert exc_info.value.detail["error"] == "recursive_nested_object"
        assert exc_info.value.detail["identifier"] == "o/tests/request/property/name"

    def test_configured_email_pattern_used_by_default(self):
        request = GenerateRequestFactory()
        request.graph[1]["range"] = {"type": "Text", "format": "Email"}

        with patch("graph_xsd_api.handlers.xsd.xsd_config") as mock_config:
            mock_config.EMAIL_PATTERN = "configured@pattern"
            mock_config.serializer_kwargs.return_value = {"indent": 0, "xml_declaration": False}
            content, _ = handle_xsd_generation(request)

        assert 'value="configured@pattern"' in content
        assert not content.startswith("<?xml")

    def test_request_option_overrides_config(self):
        request = GenerateRequestFactory(options=GenerateOptions(email_pattern="from-request"))
        request.graph[1]["range"] = {"type": "Text", "format": "Email"}

        content, _ = handle_xsd_generation(request)

        assert 'value="from-request"' in content

    def test_schema_filename_sanitized(self):
        tree = SchemaNode()
        tree.add_child("xs:element", SchemaNode({"name": "My Class/v2", "type": "c"}))

        assert schema_filename(tree) == "My_Class_v2.xsd"

    def test_schema_filename_fallback(self):
        assert schema_filename(SchemaNode()) == "schema.xsd"


@pytest.mark.unit
class TestXsdEndpoints:
    """Test suite for XSD API endpoints"""

    @pytest.fixture
    def client(self):
        """Create test client for FastAPI app."""
        return TestClient(app)

    @pytest.fixture(autouse=True)
    def dev_token(self):
        with patch.dict(os.environ, {"API_TOKEN": "devtoken"}):
            yield

    def test_health_check(self, client):
        response = client.get("/healthz")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert "X-API-Version" in response.headers

    def test_generate_returns_xml_attachment(self, client):
        payload = GenerateRequestFactory().model_dump()

        response = client.post("/api/xsd/generate", json=payload, headers=AUTH)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/xml")
        assert 'filename="Person.xsd"' in response.headers["content-disposition"]
        root = ET.fromstring(response.content)
        assert root.tag == f"{XS}schema"

    def test_tree_endpoint(self, client):
        payload = GenerateRequestFactory().model_dump()

        response = client.post("/api/xsd/tree", json=payload, headers=AUTH)

        assert response.status_code == 200
        assert response.json()["xs:schema"]["$"] == {"xmlns:xs": "http://www.w3.org/2001/XMLSchema"}

    def test_generate_linked_classes(self, client):
        request = GenerateRequestFactory()
        request.graph[0]["propertyRefs"].append({"ref": "o/tests/request/property/pet"})
        request.graph.extend([
            PropertyNodeFactory(uid="o/tests/request/property/pet", label="pet",
                                range={"type": "LinkedClass", "ref": "o/tests/request/class/pet"}),
            {"type": "Class", "uid": "o/tests/request/class/pet", "label": "Pet", "propertyRefs": []},
        ])

        response = client.post("/api/xsd/generate", json=request.model_dump(), headers=AUTH)

        assert response.status_code == 200
        root = ET.fromstring(response.content)
        assert [ct.get("name") for ct in root.findall(f"{XS}complexType")] == [
            "o/tests/request/class/pet",
            "o/tests/request/class/person",
        ]

    def test_missing_root_returns_404(self, client):
        payload = GenerateRequestFactory(root_class_id="o/tests/request/class/other").model_dump()
        payload["graph"] = GenerateRequestFactory().model_dump()["graph"]

        response = client.post("/api/xsd/generate", json=payload, headers=AUTH)

        assert response.status_code == 404
        assert response.json()["detail"]["identifier"] == "o/tests/request/class/other"

    def test_property_ref_without_ref_returns_422(self, client):
        payload = GenerateRequestFactory().model_dump()
        payload["graph"][0]["propertyRefs"].append({"cardinality": {"minItems": 1}})

        response = client.post("/api/xsd/generate", json=payload, headers=AUTH)

        assert response.status_code == 422
        assert response.json()["detail"]["error"] == "malformed_node"
        assert response.json()["detail"]["identifier"] == payload["root_class_id"]

    def test_invalid_token_rejected(self, client):
        payload = GenerateRequestFactory().model_dump()

        response = client.post("/api/xsd/generate", json=payload, headers={"Authorization": "Bearer wrong"})

        assert response.status_code == 401

    def test_missing_token_rejected(self, client):
        payload = GenerateRequestFactory().model_dump()

        response = client.post("/api/xsd/generate", json=payload)

        assert response.status_code in (401, 403)

    def test_invalid_body_rejected(self, client):
        response = client.post("/api/xsd/generate", json={"graph": []}, headers=AUTH)

        assert response.status_code == 422


class TestHealthRoute:
    """Test suite for route functions called directly"""

    @pytest.mark.asyncio
    async def test_health_check_payload(self):
        from graph_xsd_api.main import health_check

        result = await health_check()

        assert result["status"] == "healthy"
        assert result["uptime"] >= 0
