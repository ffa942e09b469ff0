"""Compare two XML files from the command line."""

import argparse
import logging
import sys
from pathlib import Path

import lxml.etree as ET

from .asserter import RaisingLogAsserter
from .config import TesterSettings, load_config
from .exceptions import ConfigError, FilterExpressionError, XmlAssertionError
from .logger import ConsoleLogger, StandardLogger


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="xmlequiv",
        description="Check whether two XML documents are semantically equivalent",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m xmlequiv expected.xml actual.xml
  python -m xmlequiv expected.xml actual.xml -c settings.yaml
  python -m xmlequiv expected.xml actual.xml --quiet
        """
    )

    parser.add_argument("expected", help="Path to the expected XML document")
    parser.add_argument("actual", help="Path to the actual XML document")
    parser.add_argument("-c", "--config", help="Path to a YAML settings file")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress console output")

    args = parser.parse_args(argv)

    for path in (args.expected, args.actual):
        if not Path(path).exists():
            print(f"Error: XML file not found: {path}", file=sys.stderr)
            return 2

    try:
        settings = load_config(args.config) if args.config else TesterSettings()
    except (ConfigError, FilterExpressionError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.quiet:
        logger = StandardLogger(logging.getLogger(__name__), logging.DEBUG)
    else:
        logger = ConsoleLogger()

    tester = settings.create_tester(RaisingLogAsserter(logger), logger)

    try:
        tester.set_expected(Path(args.expected).read_bytes())
        tester.set_actual(Path(args.actual).read_bytes())
    except ET.XMLSyntaxError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    try:
        tester.assert_equivalent(settings.filter)
    except XmlAssertionError:
        return 1
    except FilterExpressionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
