"""Print the validation report; exit status 1 when any check fails."""

import sys

from milankovic.validation.validator import validate


def main() -> int:
    report = validate()
    for line in report.lines():
        print(line)
    return 0 if report.passed else 1


if __name__ == "__main__":
    sys.exit(main())
