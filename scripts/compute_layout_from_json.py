import json
import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from slide_layout import InvalidArgumentError, create_layout
from slide_layout.config import apply_logging_config, get_config


def main():
    parser = argparse.ArgumentParser(description="Compute slide layout geometry from a LayoutRequest JSON file")
    parser.add_argument("request_json", help="Path to a LayoutRequest JSON document")
    parser.add_argument("--out", default=None, help="Write the LayoutResult here instead of stdout")
    parser.add_argument("--level", choices=["AA", "AAA"], default=None, help="WCAG level for colour checks")
    args = parser.parse_args()

    load_dotenv()
    apply_logging_config()

    request = json.loads(Path(args.request_json).resolve().read_text())
    config = get_config()
    if args.level:
        config = config.with_overrides(accessibility_level=args.level)

    try:
        result = create_layout(request, config=config)
    except InvalidArgumentError as e:
        print(f"Invalid layout request: {e}", file=sys.stderr)
        sys.exit(2)

    output = result.model_dump_json(indent=2)
    if args.out:
        Path(args.out).resolve().write_text(output)
    else:
        print(output)


if __name__ == "__main__":
    main()
