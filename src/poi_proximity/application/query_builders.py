"""SPARQL query builders for each source dialect.

Builders are pure: they validate their parameters and return query text, and
never touch the network or the graph store.
"""

import math
import re

from poi_proximity.domain.errors import InvalidQueryParameter, InvalidRadius
from poi_proximity.domain.models.bounding_box import BoundingBox
from poi_proximity.domain.models.geo_point import GeoPoint
from poi_proximity.domain.models.sparql_query import QueryDialect, SparqlQuery

# Maximum rows returned by the radius dialect
RESULT_LIMIT = 5

DEFAULT_OSM_GRAPH = "https://openstreetmap.org/graph"

_CATEGORY_PATTERN = re.compile(r"^[A-Za-z0-9_:-]+$")
_IRI_FORBIDDEN = re.compile(r"[\s<>\"{}|^`\\]")

STATION_PREFIXES = """\
PREFIX xsd: <http://www.w3.org/2001/XMLSchema#>
PREFIX schema: <http://schema.org/>
PREFIX wgs: <http://www.w3.org/2003/01/geo/wgs84_pos#>
PREFIX gtfs: <http://vocab.gtfs.org/terms#>"""

PLACE_PREFIXES = """\
PREFIX osmt: <https://wiki.openstreetmap.org/wiki/Key:>
PREFIX osmm: <https://www.openstreetmap.org/meta/>
PREFIX bif: <http://www.openlinksw.com/schemas/bif#>"""

WITHIN_PREFIXES = """\
PREFIX wkgs: <http://www.worldkg.org/schema/>
PREFIX rdfs: <http://www.w3.org/2000/01/rdf-schema#>
PREFIX geo: <http://www.opengis.net/ont/geosparql#>
PREFIX bif: <http://www.openlinksw.com/schemas/bif#>"""


def format_number(value: float, name: str) -> str:
    """Render a number as a SPARQL numeric literal.

    Raises:
        InvalidQueryParameter: If the value is not a finite real number.
    """
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise InvalidQueryParameter(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidQueryParameter(f"{name} must be finite, got {value!r}")
    return repr(float(value))


def validate_category(category: str) -> str:
    """Ensure a category label is a plain token that can be embedded verbatim."""
    if not isinstance(category, str) or not _CATEGORY_PATTERN.match(category):
        raise InvalidQueryParameter(f"Invalid category label: {category!r}")
    return category


def _validate_iri(iri: str) -> str:
    if not iri or _IRI_FORBIDDEN.search(iri):
        raise InvalidQueryParameter(f"Invalid graph IRI: {iri!r}")
    return iri


def _box_literals(box: BoundingBox) -> tuple[str, str, str, str]:
    return (
        format_number(box.lon_min, "lon_min"),
        format_number(box.lon_max, "lon_max"),
        format_number(box.lat_min, "lat_min"),
        format_number(box.lat_max, "lat_max"),
    )


def build_station_query(box: BoundingBox) -> SparqlQuery:
    """Build the bounding-box query for stations in the local graph.

    Coordinates are cast to xsd:double so the box filter compares numbers,
    not strings. No row limit is applied.
    """
    lon_min, lon_max, lat_min, lat_max = _box_literals(box)
    text = f"""{STATION_PREFIXES}
SELECT ?station ?name ?lat ?long
WHERE {{
  ?station a gtfs:Station ;
           schema:name ?name ;
           wgs:lat ?lat ;
           wgs:long ?long .

  FILTER(xsd:double(?lat) >= {lat_min} && xsd:double(?lat) <= {lat_max})
  FILTER(xsd:double(?long) >= {lon_min} && xsd:double(?long) <= {lon_max})
}}"""
    return SparqlQuery(text=text, dialect=QueryDialect.BOUNDING_BOX)


def build_place_query(
    origin: GeoPoint,
    radius_km: float,
    category: str,
    limit: int = RESULT_LIMIT,
    graph_iri: str = DEFAULT_OSM_GRAPH,
) -> SparqlQuery:
    """Build the radius query for tagged places on a geospatial endpoint.

    Distance is computed server-side with the endpoint's geometry functions,
    filtered to the radius, ordered ascending and capped at ``limit``. The
    website is optional per row.

    Args:
        origin: Search origin.
        radius_km: Search radius in kilometres.
        category: OSM tourism tag value, e.g. "museum".
        limit: Maximum number of rows.
        graph_iri: Named graph holding the OSM data.

    Raises:
        InvalidRadius: If radius_km is not positive and finite.
        InvalidQueryParameter: If any other value cannot be embedded safely.
    """
    if isinstance(radius_km, bool) or not isinstance(radius_km, int | float):
        raise InvalidRadius(radius_km)
    if not math.isfinite(radius_km) or radius_km <= 0:
        raise InvalidRadius(radius_km)
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise InvalidQueryParameter(f"limit must be a positive integer, got {limit!r}")

    longitude = format_number(origin.longitude, "longitude")
    latitude = format_number(origin.latitude, "latitude")
    radius = format_number(radius_km, "radius_km")
    tag = validate_category(category)
    graph = _validate_iri(graph_iri)

    text = f"""{PLACE_PREFIXES}
SELECT ?osmid ?name ?website ?distance
FROM <{graph}>
WHERE {{
  ?osmid osmt:tourism "{tag}" ;
         osmt:name ?name ;
         osmm:loc ?geom .

  OPTIONAL {{
    ?osmid osmt:website ?website .
  }}

  BIND(bif:st_distance(bif:st_geomfromtext(bif:st_astext(?geom)), bif:st_geomfromtext("POINT({longitude} {latitude})")) AS ?distance)
  FILTER(?distance < {radius})
}}
ORDER BY ASC(?distance)
LIMIT {limit}"""
    return SparqlQuery(text=text, dialect=QueryDialect.RADIUS)


def build_within_query(box: BoundingBox, category: str) -> SparqlQuery:
    """Build the polygon containment query for typed places.

    The endpoint returns each place's WKT geometry so that distances can be
    computed client-side.
    """
    _box_literals(box)
    kind = validate_category(category)
    polygon = box.to_wkt()

    text = f"""{WITHIN_PREFIXES}
SELECT ?p ?name ?fWKT
WHERE {{
  ?p a wkgs:{kind} ;
     rdfs:label ?name .
  ?p wkgs:spatialObject [ geo:asWKT ?fWKT ] .

  FILTER(bif:st_Within(?fWKT, "{polygon}"^^geo:wktLiteral))
}}"""
    return SparqlQuery(text=text, dialect=QueryDialect.WITHIN_POLYGON)
