"""XML and JSON examples; on SQLite the XML paths go through ElementTree."""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET

import pytest

from sqlsamples.core.dialect import get_dialect
from sqlsamples.examples import get_registry


class TestXml:
    def test_xml_elements(self, run):
        rows = run("semistructured.xml_elements").as_dicts()
        assert [(r["email"], r["city"], r["age"]) for r in rows] == [
            ("john.smith@email.com", "New York", "35"),
            ("jane.doe@email.com", "San Francisco", "28"),
        ]

    def test_xml_predicate(self, run):
        rows = run("semistructured.xml_predicate").as_dicts()
        assert [(r["customer_name"], r["city"]) for r in rows] == [("John Smith", "New York")]

    def test_xml_address(self, run):
        first, second = run("semistructured.xml_address").as_dicts()
        assert first == {
            "customer_name": "John Smith",
            "street": "123 Main St",
            "city": "New York",
            "state": "NY",
            "zip": "10001",
        }
        assert second["zip"] == "94102"

    def test_xml_nested(self, run):
        (server,) = run("semistructured.xml_nested").as_dicts()
        assert server["product_id"] == 201
        assert server["cpu_model"] == "Intel Xeon Gold 6248R"
        assert server["cpu_cores"] == "24"
        assert server["memory"] == "256GB"
        assert server["operating_system"] == "Red Hat Enterprise Linux 8"


    def test_xml_to_json(self, run):
        rows = run("semistructured.xml_to_json").as_dicts()
        assert [json.loads(r["profile_json"]) for r in rows] == [
            {"email": "john.smith@email.com", "city": "New York"},
            {"email": "jane.doe@email.com", "city": "San Francisco"},
        ]

    def test_xml_aggregation(self, run):
        rows = run("semistructured.xml_aggregation").as_dicts()
        assert [(r["customer_id"], r["order_count"]) for r in rows] == [(1, 2), (2, 2), (3, 1)]
        acme = ET.fromstring(rows[0]["customer_xml"])
        assert acme.tag == "customer"
        assert acme.get("id") == "1"
        assert acme.findtext("name") == "Acme Corporation"
        orders = {o.get("id"): o for o in acme.iter("order")}
        assert set(orders) == {"1", "6"}
        assert orders["6"].findtext("date") == "2024-03-01"
        assert float(orders["1"].findtext("amount")) == pytest.approx(15679.85)

    def test_xml_validation(self, run):
        statuses = run("semistructured.xml_validation").column("xml_status")
        assert statuses == ["Valid XML", "Valid XML", "No XML Data", "No XML Data"]

    def test_xml_validation_flags_malformed_document(self, run, seeded):
        run("semistructured.xml_validation")
        seeded.execute(
            "INSERT INTO customer_profiles (customer_id, customer_name, profile_xml) "
            "VALUES (5, 'Broken Profile', '<profile><personal>')"
        )
        statuses = run("semistructured.xml_validation").column("xml_status")
        assert statuses[-1] == "Invalid XML"


class TestJson:
    def test_json_values(self, run):
        rows = run("semistructured.json_values").as_dicts()
        assert [(r["customer_name"], r["theme"], r["language"]) for r in rows] == [
            ("Bob Wilson", "dark", "en"),
            ("Alice Brown", "light", "es"),
        ]

    def test_json_objects(self, run):
        rows = run("semistructured.json_objects").as_dicts()
        assert len(rows) == 2
        assert json.loads(rows[0]["notifications_obj"]) == {"email": True, "push": False, "sms": True}
        assert json.loads(rows[1]["privacy_obj"])["profile_visible"] is False

    def test_json_arrays(self, run):
        rows = run("semistructured.json_arrays").as_dicts()
        assert [r["rating_count"] for r in rows] == [5, 4]
        assert json.loads(rows[0]["tags"]) == ["electronics", "computers", "business"]

    def test_json_filter(self, run):
        (bob,) = run("semistructured.json_filter").as_dicts()
        assert bob["customer_name"] == "Bob Wilson"
        assert bool(bob["email_enabled"]) is True
        assert bool(bob["push_enabled"]) is False

    def test_json_exists(self, run):
        assert run("semistructured.json_exists").column("customer_id") == [3, 4]

    def test_json_from_rows(self, run):
        rows = run("semistructured.json_from_rows").as_dicts()
        assert len(rows) == 10
        acme = json.loads(rows[0]["customer_json"])
        assert acme["id"] == 1
        assert acme["name"] == "Acme Corporation"
        assert acme["country"] == "USA"


class TestHybrid:
    def test_one_row_per_profile(self, run):
        rows = run("semistructured.hybrid_profiles").as_dicts()
        assert [r["source_format"] for r in rows] == ["XML", "XML", "JSON", "JSON"]
        assert rows[0]["newsletter"] == "true"
        assert rows[0]["theme"] is None
        assert rows[2]["email"] is None
        assert rows[2]["theme"] == "dark"

    def test_postgres_renders_xpath(self):
        sql = get_registry().get("semistructured.xml_predicate").render(get_dialect("postgresql"))
        assert "xpath_exists('/profile/address[city=\"New York\"]'" in sql
