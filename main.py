# Entry point for command-line lookups.
#
#     python main.py places 37.7749,-122.4194 -p q=coffee
#     python main.py context 8.8.8.8
#
# Credentials come from SIMPLEGEO_KEY / SIMPLEGEO_SECRET or simplegeo.yaml.

import sys

from simplegeo_client.cli import main


if __name__ == "__main__":
    sys.exit(main())
