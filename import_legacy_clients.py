# import_legacy_clients.py
#
# One-off import of the old system's client export, same rules as
# POST /api/legacy/import. The source file is left in place.
#
#   python import_legacy_clients.py /path/to/listado-clientes.csv

import os
import sys

from legacy_claims import create_app
from legacy_claims.services import import_legacy_file


def main(argv):
    if len(argv) != 2:
        print("usage: python import_legacy_clients.py EXPORT_FILE")
        return 2

    path = argv[1]
    if not os.path.exists(path):
        print("Export file not found:", path)
        return 1

    app = create_app()
    with app.app_context():
        result = import_legacy_file(path, app.config["LEGACY"])

    print("Import complete.")
    print("Imported:", result.imported)
    print("Duplicates (box id already there):", result.duplicates)
    print("Errors:", result.errors)
    print("Non-blank lines:", result.total)
    for sample in result.sample_errors:
        print("  ", sample)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
