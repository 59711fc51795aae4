"""Constants for SPARQL endpoint adapters."""

# Virtuoso endpoint with the OpenStreetMap graph and bif: geometry functions
SPARQL_ENDPOINT_URL = "https://era.ilabt.imec.be/virtuoso/sparql"
OSM_GRAPH_IRI = "https://openstreetmap.org/graph"

# WorldKG endpoint; only reachable from browsers through the CORS relay
WITHIN_ENDPOINT_URL = "https://www.worldkg.org/sparql"
CORS_RELAY_URL = "https://proxy.linkeddatafragments.org/"

SPARQL_RESULTS_JSON = "application/sparql-results+json"

# HTTP headers
DEFAULT_HEADERS = {
    "Accept": SPARQL_RESULTS_JSON,
}

# Result variables that may hold the entity IRI, in order of preference
IDENTIFIER_FIELDS = ("osmid", "p", "station")
WKT_FIELDS = ("fWKT", "geom")
