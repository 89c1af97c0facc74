"""Run the discount function once: input JSON on stdin, result JSON on stdout.

    python -m bxgy_discount < input.json
"""

import json
import sys

from pydantic import ValidationError

from bxgy_discount.config import FunctionSettings
from bxgy_discount.engine import run
from bxgy_discount.models.schemas import FunctionRunInput
from bxgy_discount.utils.logger import set_level


def main() -> int:
    settings = FunctionSettings.from_env()
    set_level(settings.log_level)

    try:
        payload = FunctionRunInput.model_validate_json(sys.stdin.read())
    except ValidationError as exc:
        print(f"Invalid function input: {exc}", file=sys.stderr)
        return 1

    result = run(payload, settings)
    json.dump(result.to_wire(), sys.stdout)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
