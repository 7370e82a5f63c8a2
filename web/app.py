#!/usr/bin/env python3
"""Taxabrowser Web - browse and search the bilingual taxonomy.

Run with:
    python web/app.py

Then visit http://localhost:8080
"""

import os
import sys
from pathlib import Path

from flask import Flask, jsonify, render_template, request, session
from markupsafe import escape

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from taxabrowser.cascade import CascadeController
from taxabrowser.dataset import TaxonomyDataset
from taxabrowser.formatting import format_local_names, format_path, species_card
from taxabrowser.index import LEVELS, TaxonomyIndex
from taxabrowser.logging_config import configure_logging
from taxabrowser.models import BilingualText
from taxabrowser.search import SearchEngine, highlight_text, prepare_query

app = Flask(__name__)
app.secret_key = os.environ.get('TAXABROWSER_SECRET_KEY', 'taxabrowser-secret-key-change-in-production')
app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'
app.config['SESSION_COOKIE_SECURE'] = False  # Set True in production with HTTPS

# Client-side debounce window for the search box
SEARCH_DEBOUNCE_MS = 300

DEFAULT_DATA_PATH = Path(__file__).parent.parent / "data" / "taxonomy.json"

# Global data (loaded once at startup)
dataset: TaxonomyDataset | None = None
index: TaxonomyIndex | None = None
search_engine: SearchEngine | None = None


def get_controller() -> CascadeController:
    """Rebuild the session's cascade state by replaying its selections."""
    controller = CascadeController(index)
    controller.restore(session.get('selections', []))
    return controller


def save_controller(controller: CascadeController) -> None:
    """Store the selections in the session as English keys."""
    session['selections'] = [value.key if value else None for value in controller.selections]


def state_payload(controller: CascadeController) -> dict:
    """Describe every selector and the species grid for the page."""
    levels = []
    for i, state in enumerate(controller.levels):
        levels.append({
            'index': i,
            'name': state.name,
            'label': state.label,
            'enabled': state.enabled,
            'selected': state.selected.key if state.selected else None,
            'options': [option.to_dict() for option in state.options],
        })

    return {
        'levels': levels,
        'species': [species_card(record) for record in controller.results],
    }


def search_payload(query: str) -> list[dict]:
    """Run a search and mark up the matches for the dropdown."""
    results = []
    for hit in search_engine.search(query):
        species = hit.species
        local_names = format_local_names(species.local_names)
        results.append({
            'species': {'Arabic': species.arabic, 'English': species.english},
            'name_ar': highlight_text(species.arabic, query, escape=escape),
            'name_en': highlight_text(species.english, query, escape=escape),
            'local_names': highlight_text(local_names, query, escape=escape) if local_names else '',
            'path_text': format_path(hit.path),
            'path': [value.key for value in hit.path],
            'score': hit.score,
        })
    return results


@app.route('/')
def index_page():
    """Main page."""
    return render_template('index.html', levels=LEVELS, debounce_ms=SEARCH_DEBOUNCE_MS)


@app.route('/health')
def health():
    """Health check endpoint for debugging."""
    return jsonify({
        'status': 'ok',
        'dataset_loaded': dataset is not None,
        'records': len(index) if index is not None else 0,
        'last_modified': dataset.last_modified.isoformat() if dataset is not None else None,
    })


@app.route('/api/state')
def current_state():
    """Get the selectors and species grid for this session."""
    return jsonify(state_payload(get_controller()))


@app.route('/api/select', methods=['POST'])
def select_level():
    """Apply a change at one level."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Expected a JSON object'}), 400
    level = data.get('level')
    value = data.get('value')

    if isinstance(level, bool) or not isinstance(level, int) or not 0 <= level < len(LEVELS):
        return jsonify({'error': 'Invalid level'}), 400
    if value is not None and not isinstance(value, str):
        return jsonify({'error': 'Invalid value'}), 400

    controller = get_controller()
    controller.choose(level, value or None)
    save_controller(controller)
    return jsonify(state_payload(controller))


@app.route('/api/reset', methods=['POST'])
def reset_selection():
    """Clear all selections."""
    session.pop('selections', None)
    return jsonify(state_payload(get_controller()))


@app.route('/api/search')
def search():
    """Search species by name, description or local name."""
    query = prepare_query(request.args.get('q'))
    if query is None:
        return jsonify({'query': None, 'results': []})
    return jsonify({'query': query, 'results': search_payload(query)})


@app.route('/api/jump', methods=['POST'])
def jump_to_species():
    """Select a search result's full path and locate the species."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Expected a JSON object'}), 400
    path_keys = data.get('path')
    target = data.get('species')

    if (
        not isinstance(path_keys, list)
        or len(path_keys) != len(LEVELS)
        or not all(isinstance(key, str) for key in path_keys)
    ):
        return jsonify({'error': f'Path must list {len(LEVELS)} names'}), 400
    if target is not None and (
        not isinstance(target, dict)
        or not all(isinstance(target.get(k, ''), str) for k in ('English', 'Arabic'))
    ):
        return jsonify({'error': 'Species must be an object with Arabic and English names'}), 400

    path = [
        index.lookup(level, key) or BilingualText(english=key)
        for level, key in enumerate(path_keys)
    ]
    target_name = None
    if target and (target.get('English') or target.get('Arabic')):
        target_name = BilingualText(english=target.get('English', ''), arabic=target.get('Arabic', ''))

    controller = CascadeController(index)
    target_index = controller.select_path(path, target_name)
    save_controller(controller)

    payload = state_payload(controller)
    payload['target_index'] = target_index
    return jsonify(payload)


def load_data(path: str | Path | None = None) -> None:
    """Load taxonomy data at startup."""
    global dataset, index, search_engine

    data_path = Path(path or os.environ.get('TAXABROWSER_DATA') or DEFAULT_DATA_PATH)

    print(f"Loading taxonomy dataset from {data_path}...")
    dataset = TaxonomyDataset(data_path)
    index = TaxonomyIndex(dataset.records)
    search_engine = SearchEngine(dataset.records)

    print(f"Data loaded! ({len(index):,} records)")


if __name__ == '__main__':
    configure_logging()

    print("\n" + "=" * 50)
    print("Starting Taxabrowser Web Server...")
    print("=" * 50 + "\n")

    load_data()

    print("\n" + "=" * 50)
    print("Server ready!")
    print("Visit: http://127.0.0.1:8080")
    print("Health check: http://127.0.0.1:8080/health")
    print("=" * 50 + "\n")

    app.run(debug=True, port=8080, host='127.0.0.1')
