from zipfed.datasets.dialect import Dialect

DATASET = {
    "name": "simplified",
    "source_name": "zipfed export",
    "limitations": "Unquoted; a city or state containing a comma cannot be represented.",
}

DIALECT = Dialect(
    name="simplified",
    columns=("zip", "kind", "city", "state", "lat", "lon"),
)
