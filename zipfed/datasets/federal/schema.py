from zipfed.datasets.dialect import Dialect

DATASET = {
    "name": "federal",
    "source_name": "federalgovernmentzipcodes.us (Primary)",
    "source_url": "http://federalgovernmentzipcodes.us/free-zipcode-database-Primary.csv",
    "limitations": "Every textual column is double-quoted; Lat/Long are bare numbers and may be blank for some military ZIPs.",
}

DIALECT = Dialect(
    name="federal",
    columns=(
        None,  # RecordNumber
        "zip",
        "kind",
        "city",
        "state",
        None,  # LocationType
        "lat",
        "lon",
        None,  # Xaxis
        None,  # Yaxis
        None,  # Zaxis
    ),
    quoted=True,
    header_sentinel='"RecordNumber"',
)
