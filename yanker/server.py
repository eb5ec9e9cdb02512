"""HTTP JSON front for the open-graph algebra.

Graphs travel in their JSON form (OpenGraph.to_dict()).  Undefined results
are answered with null rather than an error:

  POST /api/check     {"graph": G}              -> {"valid": bool}
  POST /api/make_edge {"graph": G, "a": P, "b": P} -> {"edge": E | null}
  POST /api/vcomp     {"a": G, "b": G}          -> {"graph": G | null}
  POST /api/hcomp     {"a": G, "b": G}          -> {"graph": G}
  POST /api/shift     {"graph": G, "offset": n} -> {"graph": G}
  POST /api/dot       {"graph": G}              -> text/plain dotty

Malformed payloads get a 400 with {"error": ...}.
"""

from flask import Flask, Response, jsonify, request

from .graph.primitives import Path
from .graph.open_graph import OpenGraph, check_graph, make_edge, shift_graph_ids
from .graph.compose import hori_comp, vert_comp
from .ops.export import to_dotty

app = Flask(__name__)


def _payload() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValueError("Expected a JSON object body")
    return data


def _graph(data: dict, key: str) -> OpenGraph:
    if key not in data:
        raise ValueError(f"Missing {key!r}")
    return OpenGraph.from_dict(data[key])


@app.errorhandler(ValueError)
@app.errorhandler(KeyError)
@app.errorhandler(TypeError)
@app.errorhandler(AttributeError)
def bad_request(e):
    return jsonify({'error': f'Malformed request: {e}'}), 400


@app.route('/api/check', methods=['POST'])
def api_check():
    g = _graph(_payload(), 'graph')
    return jsonify({'valid': check_graph(g)})


@app.route('/api/make_edge', methods=['POST'])
def api_make_edge():
    data = _payload()
    g = _graph(data, 'graph')
    edge = make_edge(g, Path.from_dict(data['a']), Path.from_dict(data['b']))
    return jsonify({'edge': edge.to_dict() if edge else None})


@app.route('/api/vcomp', methods=['POST'])
def api_vcomp():
    data = _payload()
    result = vert_comp(_graph(data, 'a'), _graph(data, 'b'))
    return jsonify({'graph': result.to_dict() if result else None})


@app.route('/api/hcomp', methods=['POST'])
def api_hcomp():
    data = _payload()
    return jsonify({'graph': hori_comp(_graph(data, 'a'), _graph(data, 'b')).to_dict()})


@app.route('/api/shift', methods=['POST'])
def api_shift():
    data = _payload()
    offset = int(data.get('offset', 0))
    return jsonify({'graph': shift_graph_ids(_graph(data, 'graph'), offset).to_dict()})


@app.route('/api/dot', methods=['POST'])
def api_dot():
    g = _graph(_payload(), 'graph')
    return Response(to_dotty(g), mimetype='text/plain')


def run(host='127.0.0.1', port=5000, debug=False):
    print(f"\n  yanker graph API → http://{host}:{port}\n")
    app.run(host=host, port=port, debug=debug)
