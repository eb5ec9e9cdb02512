"""Export operations — dotty text for external graph viewers."""

from ..graph.open_graph import OpenGraph

DOT_HEADER = "/* Output generated by http://github.com/wetneb/yanker */\ndigraph G {\n"
DOT_FOOTER = "}\n"


def to_dotty(graph: OpenGraph) -> str:
    """Render the edge set as a dot digraph, one line per edge.

    Only node ids are emitted (the boundary shows up as node "0"); gate names
    and node labels are left out.  Lines follow the sorted edge order, so equal
    edge sets always render identically.
    """
    lines = [f'"{e.source.node_id}" -> "{e.target.node_id}";\n' for e in sorted(graph.edges)]
    return DOT_HEADER + "".join(lines) + DOT_FOOTER
