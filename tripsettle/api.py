import logging
import logging.config
from functools import wraps

from flask import Flask, current_app, jsonify, request
from flask_cors import CORS

from tripsettle.config import Config, logging_config
from tripsettle.display import settlement_lines
from tripsettle.models import ExpenseRecord, ParticipantId, PayloadError, to_amount
from tripsettle.settlement import aggregate, minimize, round_half_up, summarize

logger = logging.getLogger(__name__)


def _json_errors(view):
    """Bad payloads are the caller's fault (400), anything else is ours (500)."""
    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except PayloadError as e:
            logger.info("Rejected %s: %s", request.path, e)
            return jsonify({"error": str(e)}), 400
        except Exception as e:
            logger.exception("Failed to handle %s", request.path)
            return jsonify({"error": str(e)}), 500
    return wrapper


def _body():
    data = request.get_json(silent=True)
    if data is None:
        raise PayloadError("request body must be JSON")
    # A bare list is the older front end posting just its expenses
    if isinstance(data, list):
        return {"expenses": data}
    if not isinstance(data, dict):
        raise PayloadError("request body must be an object or a list of expenses")
    return data


def _id_list(value, what):
    if value is None:
        return []
    if isinstance(value, str) or not isinstance(value, list):
        raise PayloadError(f"{what} must be a list")
    return [ParticipantId(str(p)) for p in value]


def _precision(data):
    value = data.get("precision", current_app.config["PRECISION"])
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 6:
        raise PayloadError(f"precision must be an integer between 0 and 6, got {value!r}")
    return value


def _balances(data):
    expenses = data.get("expenses", [])
    if not isinstance(expenses, list):
        raise PayloadError("expenses must be a list")
    records = [ExpenseRecord.from_dict(item) for item in expenses]
    roster = _id_list(data.get("roster"), "roster")
    return aggregate(records, roster), len(records)


def create_app(config_object=Config, **overrides):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.config.update(overrides)

    logging.config.dictConfig(logging_config(app.config["LOG_LEVEL"]))
    # the front end is served from a different origin
    CORS(app, origins=app.config["CORS_ORIGINS"], send_wildcard=True)

    @app.route('/api', methods=['GET'])
    def health_check():
        return jsonify({"status": "healthy", "message": "Backend is running!"})

    @app.route('/api/calculate', methods=['POST'])
    @_json_errors
    def calculate():
        data = _body()
        balances, count = _balances(data)
        precision = _precision(data)
        transfers = minimize(balances, precision=precision)

        names = data.get("names") or {}
        if not isinstance(names, dict):
            raise PayloadError("names must be an object")
        lines = settlement_lines(
            transfers,
            viewer_id=data.get("viewer"),
            known_names=names,
            locale=data.get("locale") or current_app.config["LOCALE"],
            self_marker=data.get("self"),
            precision=precision,
        )
        logger.info("Settled %d expenses into %d transfers", count, len(transfers))

        return jsonify({
            "balances": {p: round_half_up(b, 2) for p, b in balances.items()},
            "transfers": [t.to_dict() for t in transfers],
            "summaries": [s.to_dict() for s in summarize(balances, transfers)],
            "lines": lines,
        })

    @app.route('/api/balances', methods=['POST'])
    @_json_errors
    def net_balances():
        balances, _ = _balances(_body())
        return jsonify({"balances": {p: round_half_up(b, 2) for p, b in balances.items()}})

    @app.route('/api/settle', methods=['POST'])
    @_json_errors
    def settle():
        data = _body()
        raw = data.get("balances")
        if not isinstance(raw, dict):
            raise PayloadError("balances must be an object")
        balances = {
            ParticipantId(person): to_amount(value, f"balance for {person}")
            for person, value in raw.items()
        }
        transfers = minimize(balances, precision=_precision(data))
        return jsonify({"transfers": [t.to_dict() for t in transfers]})

    return app

