"""Leaderboard HTTP server: ``GET /scores`` and ``POST /scores``."""

from __future__ import annotations

import logging

from flask import Blueprint, Flask, current_app, jsonify, make_response, request
from pydantic import BaseModel, Field, StrictInt, ValidationError, field_validator

from six7typing.config import AppConfig, configure_logging
from six7typing.core.leaderboard import DEFAULT_LIMIT, MAX_NAME_LENGTH, MAX_SCORE, LeaderboardStore

logger = logging.getLogger(__name__)

MAX_LIST_LIMIT = 100
STORE_KEY = "LEADERBOARD_STORE"

scores_api = Blueprint("scores_api", __name__)


class ScoreSubmissionModel(BaseModel):
    name: str
    score: StrictInt = Field(ge=0, le=MAX_SCORE)

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        value = value.strip()
        if not value or len(value) > MAX_NAME_LENGTH:
            raise ValueError(f"name must be 1..{MAX_NAME_LENGTH} characters")
        return value


def _store() -> LeaderboardStore:
    return current_app.config[STORE_KEY]


@scores_api.route("/scores", methods=["GET"])
def api_list_scores():
    limit = request.args.get("limit", default=DEFAULT_LIMIT, type=int)
    limit = max(1, min(MAX_LIST_LIMIT, limit))
    entries = _store().list_scores(limit)
    return jsonify([{"name": e.name, "score": e.score} for e in entries])


@scores_api.route("/scores", methods=["POST"])
def api_submit_score():
    try:
        data = request.get_json(silent=True)
        model = ScoreSubmissionModel(**data)
    except (TypeError, ValidationError) as e:
        logger.info("Invalid score submission: %s", e)
        return make_response("Invalid", 400)
    if not _store().submit(model.name, model.score):
        return make_response("Invalid", 400)
    return make_response("OK", 200)


def create_app(store: LeaderboardStore) -> Flask:
    app = Flask(__name__)
    app.config[STORE_KEY] = store
    app.register_blueprint(scores_api)
    return app


def main() -> int:
    config = AppConfig.from_env()
    configure_logging(config.log_level)
    store = LeaderboardStore(config.scores_file)
    app = create_app(store)
    logger.info("Leaderboard server on http://%s:%d (scores in %s)", config.host, config.port, store.file_path)
    app.run(host=config.host, port=config.port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
