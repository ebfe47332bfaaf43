"""XML and JSON documents stored in text columns.

Paths are written once and rendered per engine: absolute element paths
for XML (``/profile/address/city``) and ``$``-rooted paths for JSON
(``$.notifications.email``).  The topic's prepare step creates the
document tables and loads the sample documents.
"""

from __future__ import annotations

from sqlsamples.core.adapters.base import DatabaseAdapter
from sqlsamples.core.dialect import Dialect
from sqlsamples.examples.base import Topic, registry
from sqlsamples.schema.ddl import setup_schema
from sqlsamples.schema.tables import TableGroup
from sqlsamples.seed.data import DOCUMENT_ROWS
from sqlsamples.seed.loader import load_rows


def prepare(adapter: DatabaseAdapter) -> None:
    setup_schema(adapter, [TableGroup.SEMISTRUCTURED])
    load_rows(adapter, DOCUMENT_ROWS)


TOPIC = registry.add_topic(
    Topic("semistructured", "XML and JSON", order=6, prepare=prepare)
)

example = registry.example


@example("semistructured", "xml_elements", "Scalar values out of XML profiles")
def xml_elements(d: Dialect) -> str:
    return f"""
SELECT
    customer_id,
    customer_name,
    {d.xml_value("profile_xml", "/profile/personal/email")} AS email,
    {d.xml_value("profile_xml", "/profile/address/city")} AS city,
    {d.xml_value("profile_xml", "/profile/personal/age")} AS age
FROM customer_profiles
WHERE profile_xml IS NOT NULL
ORDER BY customer_id
"""


@example("semistructured", "xml_predicate", "Profiles whose address is in New York")
def xml_predicate(d: Dialect) -> str:
    return f"""
SELECT
    customer_id,
    customer_name,
    {d.xml_value("profile_xml", "/profile/address/city")} AS city
FROM customer_profiles
WHERE {d.xml_exists("profile_xml", '/profile/address[city="New York"]')}
ORDER BY customer_id
"""


@example("semistructured", "xml_address", "Full address shredded into columns")
def xml_address(d: Dialect) -> str:
    parts = ("street", "city", "state", "zip")
    columns = ",\n    ".join(
        f"{d.xml_value('profile_xml', f'/profile/address/{part}')} AS {part}" for part in parts
    )
    return f"""
SELECT
    customer_name,
    {columns}
FROM customer_profiles
WHERE profile_xml IS NOT NULL
ORDER BY customer_id
"""


@example("semistructured", "xml_nested", "Hardware details from a nested specification")
def xml_nested(d: Dialect) -> str:
    doc = "specifications_xml"
    return f"""
SELECT
    product_id,
    product_name,
    {d.xml_value(doc, "/specifications/hardware/cpu/model")} AS cpu_model,
    {d.xml_value(doc, "/specifications/hardware/cpu/cores")} AS cpu_cores,
    {d.xml_value(doc, "/specifications/hardware/memory/capacity")} AS memory,
    {d.xml_value(doc, "/specifications/software/os")} AS operating_system
FROM product_catalog
WHERE {doc} IS NOT NULL
ORDER BY product_id
"""


@example("semistructured", "json_values", "Scalar values out of JSON preferences")
def json_values(d: Dialect) -> str:
    return f"""
SELECT
    customer_id,
    customer_name,
    {d.json_value("preferences_json", "$.theme")} AS theme,
    {d.json_value("preferences_json", "$.language")} AS language,
    {d.json_value("preferences_json", "$.notifications.email")} AS email_notifications
FROM customer_profiles
WHERE preferences_json IS NOT NULL
ORDER BY customer_id
"""


@example("semistructured", "json_objects", "Nested JSON objects returned whole")
def json_objects(d: Dialect) -> str:
    return f"""
SELECT
    customer_id,
    customer_name,
    {d.json_query("preferences_json", "$.notifications")} AS notifications_obj,
    {d.json_query("preferences_json", "$.privacy")} AS privacy_obj
FROM customer_profiles
WHERE preferences_json IS NOT NULL
ORDER BY customer_id
"""


@example("semistructured", "json_arrays", "Tag and feature arrays with rating counts")
def json_arrays(d: Dialect) -> str:
    return f"""
SELECT
    product_id,
    product_name,
    {d.json_query("metadata_json", "$.tags")} AS tags,
    {d.json_query("metadata_json", "$.features")} AS features,
    {d.json_array_length("metadata_json", "$.ratings")} AS rating_count
FROM product_catalog
WHERE metadata_json IS NOT NULL
ORDER BY product_id
"""


@example("semistructured", "json_filter", "Filter on a JSON value")
def json_filter(d: Dialect) -> str:
    """Customers with the dark theme and their notification settings."""
    return f"""
SELECT
    customer_id,
    customer_name,
    {d.json_value("preferences_json", "$.notifications.email")} AS email_enabled,
    {d.json_value("preferences_json", "$.notifications.push")} AS push_enabled,
    {d.json_value("preferences_json", "$.privacy.profile_visible")} AS profile_public
FROM customer_profiles
WHERE {d.json_value("preferences_json", "$.theme")} = 'dark'
ORDER BY customer_id
"""


@example("semistructured", "json_exists", "Documents that carry an SMS setting")
def json_exists(d: Dialect) -> str:
    return f"""
SELECT
    customer_id,
    customer_name,
    {d.json_value("preferences_json", "$.notifications.sms")} AS sms_enabled
FROM customer_profiles
WHERE preferences_json IS NOT NULL
  AND {d.json_exists("preferences_json", "$.notifications.sms")}
ORDER BY customer_id
"""


@example("semistructured", "json_from_rows", "JSON documents built from relational rows")
def json_from_rows(d: Dialect) -> str:
    document = d.json_object(
        [
            ("id", "customer_id"),
            ("name", "customer_name"),
            ("city", "city"),
            ("country", "country"),
            ("credit_limit", "credit_limit"),
        ]
    )
    return f"""
SELECT
    customer_id,
    {document} AS customer_json
FROM customers
ORDER BY customer_id
"""


@example("semistructured", "xml_to_json", "XML profile values re-emitted as JSON")
def xml_to_json(d: Dialect) -> str:
    document = d.json_object(
        [
            ("email", d.xml_value("profile_xml", "/profile/personal/email")),
            ("city", d.xml_value("profile_xml", "/profile/address/city")),
        ]
    )
    return f"""
SELECT
    customer_id,
    customer_name,
    {document} AS profile_json
FROM customer_profiles
WHERE profile_xml IS NOT NULL
ORDER BY customer_id
"""


@example("semistructured", "xml_aggregation", "One XML document per customer with its orders")
def xml_aggregation(d: Dialect) -> str:
    """Elements are assembled as text, so the document is the same on every engine.

    Customers without orders get an empty ``<orders/>`` list.
    """
    order = d.concat(
        "'<order id=\"'",
        d.cast_text("o.order_id", 10),
        "'\"><date>'",
        d.cast_text("o.order_date", 10),
        "'</date><amount>'",
        d.cast_text("o.total_amount", 20),
        "'</amount></order>'",
    )
    customer = d.concat(
        "'<customer id=\"'",
        d.cast_text("c.customer_id", 10),
        "'\"><name>'",
        "c.customer_name",
        "'</name><orders>'",
        f"COALESCE({d.string_agg(order, '')}, '')",
        "'</orders></customer>'",
    )
    return f"""
SELECT
    c.customer_id,
    COUNT(o.order_id) AS order_count,
    {customer} AS customer_xml
FROM customers c
LEFT JOIN orders o ON c.customer_id = o.customer_id
WHERE c.customer_id <= 3
GROUP BY c.customer_id, c.customer_name
ORDER BY c.customer_id
"""


@example("semistructured", "xml_validation", "Which profiles hold a well-formed XML document")
def xml_validation(d: Dialect) -> str:
    return f"""
SELECT
    customer_id,
    customer_name,
    CASE
        WHEN profile_xml IS NULL THEN 'No XML Data'
        WHEN {d.xml_exists("profile_xml", "/profile")} THEN 'Valid XML'
        ELSE 'Invalid XML'
    END AS xml_status
FROM customer_profiles
ORDER BY customer_id
"""


@example("semistructured", "hybrid_profiles", "One row per profile from XML or JSON")
def hybrid_profiles(d: Dialect) -> str:
    """Each profile is stored in one format; the other column is NULL."""
    return f"""
SELECT
    customer_id,
    customer_name,
    CASE WHEN profile_xml IS NOT NULL THEN 'XML' ELSE 'JSON' END AS source_format,
    {d.xml_value("profile_xml", "/profile/personal/email")} AS email,
    {d.xml_value("profile_xml", "/profile/preferences/newsletter")} AS newsletter,
    {d.json_value("preferences_json", "$.theme")} AS theme,
    {d.json_value("preferences_json", "$.language")} AS language
FROM customer_profiles
ORDER BY customer_id
"""
