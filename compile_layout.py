#!/usr/bin/env python3
"""
Layout Compiler Script

Compile a layout description: views + constraint directives → resolved constraints

Usage:
    python compile_layout.py --layout layouts/profile.yaml --config configs/compiler.yaml
"""

import argparse
import dataclasses
import json
import logging
from pathlib import Path
from datetime import datetime

from layout_compiler import (CompilerConfig, RecordingEmitter, compile_layout, load_config,
                             LayoutValidationError)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Compile layout constraint directives")
    parser.add_argument("--layout", type=str, required=True, help="Layout file (JSON or YAML)")
    parser.add_argument("--config", type=str, default=None, help="YAML compiler config")
    parser.add_argument("--output", type=str, default=None, help="Output JSON file (stdout if omitted)")
    parser.add_argument("--horizontal", type=str, default=None, help="Horizontal size class (compact/regular)")
    parser.add_argument("--vertical", type=str, default=None, help="Vertical size class (compact/regular)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    config = load_config(args.config) if args.config else CompilerConfig()
    overrides = {}
    if args.horizontal:
        overrides["horizontal_size_class"] = args.horizontal
    if args.vertical:
        overrides["vertical_size_class"] = args.vertical
    # replace() re-runs validation on the overridden size classes
    config = dataclasses.replace(config, **overrides)
    logging.getLogger().setLevel(config.log_level)

    emitter = RecordingEmitter(config.environment)
    try:
        layout = compile_layout(Path(args.layout).read_text(), config=config, emitter=emitter)
    except LayoutValidationError as e:
        parser.exit(1, f"error: {e}\n")

    result = {
        "compiled_at": datetime.now().isoformat(),
        "layout": args.layout,
        "config": config.to_dict(),
        "active_constraints": len(emitter.active),
        **layout.to_dict(),
    }

    if args.output:
        output = Path(args.output)
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, 'w') as f:
            json.dump(result, f, indent=2)
        print(f"Done! {len(layout.constraints)} constraints, "
              f"{len(layout.diagnostics)} diagnostics -> {output}")
    else:
        print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
