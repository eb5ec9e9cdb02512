#!/usr/bin/env python3
"""yanker - open graph toolkit.

Usage:
    python -m yanker.main check GRAPH
    python -m yanker.main dot GRAPH [-o OUT]
    python -m yanker.main vcomp A B -o OUT
    python -m yanker.main hcomp A B -o OUT
    python -m yanker.main seed NAME -o OUT
    python -m yanker.main convert IN OUT
    python -m yanker.main serve [--host HOST] [--port PORT]

Graph files are read in either format; written files use the suffix
(.json → JSON, anything else → binary) unless --format is given.
"""
import argparse
import sys
from pathlib import Path

if not __package__:
    _parent = str(Path(__file__).resolve().parent.parent)
    if _parent not in sys.path:
        sys.path.insert(0, _parent)
    __package__ = "yanker"


def _save(graph, out, args, settings):
    from .ops.project_io import save_graph
    fmt = args.format
    if fmt is None and Path(out).suffix == "":
        fmt = settings.default_format
    save_graph(graph, out, fmt)


def cmd_check(args, settings):
    from .graph.open_graph import check_graph
    from .ops.project_io import load_graph
    graph = load_graph(args.graph)
    ok = check_graph(graph)
    print(f"{args.graph}: {'valid' if ok else 'INVALID'}")
    return 0 if ok else 1


def cmd_dot(args, settings):
    from .ops.export import to_dotty
    from .ops.project_io import load_graph
    text = to_dotty(load_graph(args.graph))
    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(text)
    else:
        sys.stdout.write(text)
    return 0


def cmd_vcomp(args, settings):
    from .graph.compose import vert_comp
    from .ops.project_io import load_graph
    result = vert_comp(load_graph(args.a), load_graph(args.b))
    if result is None:
        print(f"Cannot compose: outputs of {args.a} do not match inputs of {args.b}")
        return 1
    _save(result, args.output, args, settings)
    return 0


def cmd_hcomp(args, settings):
    from .graph.compose import hori_comp
    from .ops.project_io import load_graph
    _save(hori_comp(load_graph(args.a), load_graph(args.b)), args.output, args, settings)
    return 0


def cmd_seed(args, settings):
    from .graph.primitives import Gate, Polarity
    from .graph.open_graph import seed_graph
    polarity = Polarity.PRODUCER if args.producer else Polarity.CONSUMER
    _save(seed_graph(Gate(args.name, polarity)), args.output, args, settings)
    return 0


def cmd_convert(args, settings):
    from .ops.project_io import load_graph
    _save(load_graph(args.input), args.output, args, settings)
    return 0


def cmd_serve(args, settings):
    from .server import run
    run(host=args.host or settings.server_host,
        port=args.port or settings.server_port,
        debug=args.debug)
    return 0


def build_parser():
    parser = argparse.ArgumentParser(description='yanker - open graph toolkit')
    parser.add_argument('--settings', type=str, default=None,
                        help='Path to a settings.json (default: ~/.config/yanker/settings.json)')
    parser.add_argument('--format', choices=('binary', 'json'), default=None,
                        help='Format for written graph files (default: from suffix)')
    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('check', help='Check that a graph is well-formed')
    p.add_argument('graph')
    p.set_defaults(func=cmd_check)

    p = sub.add_parser('dot', help='Export a graph as dotty text')
    p.add_argument('graph')
    p.add_argument('-o', '--output', default=None)
    p.set_defaults(func=cmd_dot)

    p = sub.add_parser('vcomp', help='Compose A above B (A outputs into B inputs)')
    p.add_argument('a')
    p.add_argument('b')
    p.add_argument('-o', '--output', required=True)
    p.set_defaults(func=cmd_vcomp)

    p = sub.add_parser('hcomp', help='Put A and B side by side')
    p.add_argument('a')
    p.add_argument('b')
    p.add_argument('-o', '--output', required=True)
    p.set_defaults(func=cmd_hcomp)

    p = sub.add_parser('seed', help='Write a starting graph with a single boundary gate')
    p.add_argument('name')
    p.add_argument('--producer', action='store_true',
                   help='Make the gate a producer (default: consumer)')
    p.add_argument('-o', '--output', required=True)
    p.set_defaults(func=cmd_seed)

    p = sub.add_parser('convert', help='Rewrite a graph file in another format')
    p.add_argument('input')
    p.add_argument('output')
    p.set_defaults(func=cmd_convert)

    p = sub.add_parser('serve', help='Run the HTTP JSON API')
    p.add_argument('--host', type=str, default=None)
    p.add_argument('--port', type=int, default=None)
    p.add_argument('--debug', action='store_true')
    p.set_defaults(func=cmd_serve)

    return parser


def main(argv=None):
    from .core.settings import Settings
    args = build_parser().parse_args(argv)
    settings = Settings(args.settings)
    try:
        return args.func(args, settings)
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == '__main__':
    sys.exit(main())
