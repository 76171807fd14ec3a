from flask import Flask, jsonify, request
from credkeep.generator import generate
from credkeep.importer import parse_credentials, detect_format, detect_format_from_filename
from credkeep.report import build_report, DEFAULT_STALE_MONTHS, MAX_STALE_MONTHS
from credkeep.strength import estimate_strength, strength_percent

# the web UI offers 6-32; anything above this is refused
MAX_LENGTH = 1024

app = Flask(__name__)


def _bad_request(message):
    return jsonify({"error": message}), 400


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _int_field(data, key, default):
    value = data.get(key, default)
    # bool is an int subclass; true/false are not lengths
    if isinstance(value, bool):
        raise ValueError(f"{key} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{key} must be an integer")


@app.route('/')
def home():
    return jsonify({
        "message": "credkeep API is running"
    })

@app.route('/generate', methods=['POST'])
def generate_route():
    data = _json_body()
    try:
        length = _int_field(data, 'length', 12)
    except ValueError as e:
        return _bad_request(str(e))
    if length > MAX_LENGTH:
        return _bad_request(f"length must be at most {MAX_LENGTH}")
    options = {}
    for key, flag in (('upper', 'use_upper'), ('lower', 'use_lower'),
                      ('digits', 'use_digits'), ('symbols', 'use_symbols')):
        value = data.get(key, True)
        if not isinstance(value, bool):
            return _bad_request(f"{key} must be true or false")
        options[flag] = value
    password = generate(length, **options)
    result = estimate_strength(password)
    return jsonify({'password': password, 'strength': result['strength'], 'score': result['score']})

@app.route('/score', methods=['POST'])
def score_route():
    data = _json_body()
    password = data.get('password', '')
    if not isinstance(password, str):
        return _bad_request("password must be a string")
    result = estimate_strength(password)
    result['percent'] = strength_percent(result['score'])
    return jsonify(result)

@app.route('/import', methods=['POST'])
def import_route():
    data = _json_body()
    text = data.get('text', '')
    if not isinstance(text, str):
        return _bad_request("text must be a string")
    filename = data.get('filename')
    if filename is not None and not isinstance(filename, str):
        return _bad_request("filename must be a string")
    fmt = data.get('format')
    if fmt not in ('text', 'csv'):
        fmt = detect_format_from_filename(filename) if filename else detect_format(text)
    credentials = parse_credentials(text, fmt)
    if not credentials:
        return jsonify({'error': 'No credentials found', 'format': fmt, 'credentials': []}), 422
    return jsonify({'format': fmt, 'credentials': credentials})

@app.route('/report', methods=['POST'])
def report_route():
    data = _json_body()
    credentials = data.get('credentials', [])
    if not isinstance(credentials, list):
        return _bad_request("credentials must be a list")
    try:
        months = _int_field(data, 'stale_after_months', DEFAULT_STALE_MONTHS)
    except ValueError as e:
        return _bad_request(str(e))
    if not 0 <= months <= MAX_STALE_MONTHS:
        return _bad_request(f"stale_after_months must be between 0 and {MAX_STALE_MONTHS}")
    return jsonify(build_report([c for c in credentials if isinstance(c, dict)], stale_after_months=months))

if __name__ == "__main__":
    app.run(debug=True)
