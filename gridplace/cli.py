#!/usr/bin/env python3
"""
GridPlace CLI

Command-line interface for compacting, placing and checking grid layouts.

Usage:
    gridplace compact <layout.yaml> [options]
    gridplace place <layout.yaml> --id ID -x X -y Y -w W -H H [options]
    gridplace move <layout.yaml> --id ID -x X -y Y [options]
    gridplace breakpoint <width> [--breakpoints FILE]
    gridplace check <layout.yaml> [--cols N]
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from . import __version__
from .config import GridConfig
from .layout.abstraction import GridItem, Layout
from .placement.cascade import move_items
from .placement.compactor import CompactType, compact
from .placement.free_space import place
from .placement.legalizer import clamp_item
from .responsive.breakpoints import get_cols, resolve_breakpoint

logger = logging.getLogger(__name__)


def load_layout(path_arg: str) -> Layout:
    """
    Load a layout from a YAML or JSON file.

    The file holds either a list of items or a mapping with an ``items`` key.
    """
    path = Path(path_arg)
    if not path.exists():
        raise FileNotFoundError(f"Layout file not found: {path}")

    with open(path, 'r') as f:
        data = yaml.safe_load(f)

    if data is None:
        return Layout()
    if isinstance(data, dict):
        data = data.get('items')
    if not isinstance(data, list):
        raise ValueError(f"Layout file must hold a list of items: {path}")
    return Layout.from_dicts(data)


def load_breakpoints(path_arg: str) -> Dict[str, Any]:
    """
    Load breakpoint and column tables.

    Accepts ``{breakpoints: {...}, cols: {...}}`` or a bare name -> width
    mapping.
    """
    path = Path(path_arg)
    if not path.exists():
        raise FileNotFoundError(f"Breakpoints file not found: {path}")

    with open(path, 'r') as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Breakpoints file must hold a mapping: {path}")

    if 'breakpoints' in data:
        breakpoints = data.get('breakpoints') or {}
        cols = data.get('cols') or {}
    else:
        breakpoints, cols = data, {}
    return {
        'breakpoints': {str(k): int(v) for k, v in breakpoints.items()},
        'cols': {str(k): int(v) for k, v in cols.items()},
    }


def dump(data: Any):
    print(yaml.safe_dump(data, sort_keys=False, default_flow_style=False), end='')


def dump_layout(layout: Layout):
    dump({'items': layout.to_dicts()})


def make_config(args) -> GridConfig:
    overrides: Dict[str, Any] = {}
    if getattr(args, 'cols', None) is not None:
        overrides['cols'] = args.cols
    if getattr(args, 'compact', None) is not None:
        overrides['compact_type'] = args.compact
    return GridConfig.from_defaults(**overrides)


def layout_problems(layout: Layout, cols: int) -> List[str]:
    """Describe overlaps and bound violations in a layout."""
    problems = []
    for a, b in layout.find_overlaps():
        problems.append(f"overlap: {a} and {b}")
    for item in layout:
        if item.x < 0 or item.y < 0:
            problems.append(f"{item.id}: negative position ({item.x}, {item.y})")
        if item.right > cols:
            problems.append(f"{item.id}: extends past column {cols} (x={item.x}, w={item.w})")
        if item.min_w is not None and item.w < item.min_w:
            problems.append(f"{item.id}: width {item.w} below min_w {item.min_w}")
        if item.max_w is not None and item.w > item.max_w:
            problems.append(f"{item.id}: width {item.w} above max_w {item.max_w}")
        if item.min_h is not None and item.h < item.min_h:
            problems.append(f"{item.id}: height {item.h} below min_h {item.min_h}")
        if item.max_h is not None and item.h > item.max_h:
            problems.append(f"{item.id}: height {item.h} above max_h {item.max_h}")
    return problems


def cmd_compact(args):
    """Compact a layout."""
    layout = load_layout(args.layout)
    config = make_config(args)
    result = compact(layout, config.cols, config.compact_type)
    logger.info("Compacted %d items (%s)", len(result), config.compact_type.value)
    dump_layout(result)
    return 0


def cmd_place(args):
    """Add an item at the first free cell at or after the requested one."""
    layout = load_layout(args.layout)
    config = make_config(args)

    if args.id in layout:
        print(f"Error: Item already in layout: {args.id}")
        return 1

    item = clamp_item(GridItem(id=args.id, x=args.x, y=args.y, w=args.w, h=args.h), config.cols)
    placed = place(layout, item, config.cols)
    logger.info("Placed %s at (%d, %d)", placed.id, placed.x, placed.y)
    dump_layout(compact(layout.with_item(placed), config.cols, config.compact_type))
    return 0


def cmd_move(args):
    """Move an item, pushing colliding items down."""
    layout = load_layout(args.layout)
    config = make_config(args)

    item = layout.get(args.id)
    if item is None:
        print(f"Error: Item not in layout: {args.id}")
        return 1
    if item.static:
        print(f"Error: Item is static: {args.id}")
        return 1

    target = clamp_item(item.moved(x=args.x, y=args.y), config.cols)
    moved = move_items(layout.with_item(target), target, config.cols)
    dump_layout(compact(moved, config.cols, config.compact_type))
    return 0


def cmd_breakpoint(args):
    """Resolve the breakpoint for a container width."""
    breakpoints = None
    cols = None
    if args.breakpoints:
        tables = load_breakpoints(args.breakpoints)
        breakpoints = tables['breakpoints']
        cols = tables['cols']

    name = resolve_breakpoint(args.width, breakpoints)
    dump({'breakpoint': name, 'cols': get_cols(name, cols)})
    return 0


def cmd_check(args):
    """Report overlaps and bound violations."""
    layout = load_layout(args.layout)
    config = make_config(args)

    problems = layout_problems(layout, config.cols)
    if not problems:
        print(f"OK: {len(layout)} items, {layout.bottom()} rows, no problems")
        return 0

    print(f"Found {len(problems)} problem(s):")
    for problem in problems:
        print(f"  - {problem}")
    return 1


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description='GridPlace - grid layout placement and compaction',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  gridplace compact dashboard.yaml --cols 12
  gridplace place dashboard.yaml --id chart -x 0 -y 0 -w 4 -H 2
  gridplace move dashboard.yaml --id chart -x 4 -y 0
  gridplace breakpoint 900
  gridplace check dashboard.yaml
        """
    )
    parser.add_argument('--version', action='version', version=f'gridplace {__version__}')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')

    subparsers = parser.add_subparsers(dest='command', help='Commands')
    compact_choices = [c.value for c in CompactType]

    # Compact command
    compact_parser = subparsers.add_parser('compact', help='Compact a layout')
    compact_parser.add_argument('layout', help='Path to YAML or JSON layout file')
    compact_parser.add_argument('--cols', type=int, help='Column count (default: 12)')
    compact_parser.add_argument('--compact', choices=compact_choices,
                                help='Compaction direction (default: vertical)')

    # Place command
    place_parser = subparsers.add_parser('place', help='Add an item in the first free cell')
    place_parser.add_argument('layout', help='Path to YAML or JSON layout file')
    place_parser.add_argument('--id', required=True, help='Id of the new item')
    place_parser.add_argument('-x', type=int, default=0, help='Requested column')
    place_parser.add_argument('-y', type=int, default=0, help='Requested row')
    place_parser.add_argument('-w', type=int, default=1, help='Width in columns')
    place_parser.add_argument('-H', type=int, default=1, dest='h', help='Height in rows')
    place_parser.add_argument('--cols', type=int, help='Column count (default: 12)')
    place_parser.add_argument('--compact', choices=compact_choices,
                              help='Compaction direction (default: vertical)')

    # Move command
    move_parser = subparsers.add_parser('move', help='Move an item and push colliders down')
    move_parser.add_argument('layout', help='Path to YAML or JSON layout file')
    move_parser.add_argument('--id', required=True, help='Id of the item to move')
    move_parser.add_argument('-x', type=int, required=True, help='Target column')
    move_parser.add_argument('-y', type=int, required=True, help='Target row')
    move_parser.add_argument('--cols', type=int, help='Column count (default: 12)')
    move_parser.add_argument('--compact', choices=compact_choices,
                             help='Compaction direction (default: vertical)')

    # Breakpoint command
    breakpoint_parser = subparsers.add_parser('breakpoint',
                                              help='Resolve the breakpoint for a width')
    breakpoint_parser.add_argument('width', type=float, help='Container width in pixels')
    breakpoint_parser.add_argument('--breakpoints', help='YAML file with breakpoint/cols tables')

    # Check command
    check_parser = subparsers.add_parser('check', help='Report overlaps and bound violations')
    check_parser.add_argument('layout', help='Path to YAML or JSON layout file')
    check_parser.add_argument('--cols', type=int, help='Column count (default: 12)')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')

    # Dispatch command
    commands = {
        'compact': cmd_compact,
        'place': cmd_place,
        'move': cmd_move,
        'breakpoint': cmd_breakpoint,
        'check': cmd_check,
    }

    try:
        return commands[args.command](args)
    except (FileNotFoundError, ValueError, TypeError, yaml.YAMLError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
