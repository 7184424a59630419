from typing import Any, Dict, List

from flask import Blueprint, current_app, jsonify, request

from .errors import InvalidRangeError
from .extensions import cache
from .games import GamePart, get_game, list_games
from .models import DrawHistory
from .services.analyzer import (
    analyze_for_weights, compute_statistics, describe_combination,
    preferred_pairs_from_history, prediction_scores,
)
from .services.entropy import generate_enhanced, record_user_entropy
from .services.history import check_history, get_draws
from .services.rng import generate_mechanical, generate_optimized
from .services.strategies import generate_balanced

api_bp = Blueprint("api", __name__)

MODES = ("mechanical", "optimized", "balanced", "enhanced")


def _bad_request(message: str):
    resp = jsonify({"error": message})
    resp.status_code = 400
    return resp


def _cache_ok(resp) -> bool:
    return resp.status_code == 200


@api_bp.get("/games")
def api_games():
    return jsonify(list_games())


def _enhanced_part(part: GamePart) -> List[int]:
    pool = current_app.extensions["entropy_pool"]
    if part.allow_duplicate:
        return [pool.mixed_int(part.min, part.max) for _ in range(part.size)]
    return generate_enhanced(
        pool, part.min, part.max, part.size,
        use_external=current_app.config["ENTROPY_USE_EXTERNAL"],
        client=current_app.extensions["random_org"],
    )


def _generate(game, mode: str) -> Dict[str, Any]:
    cfg = current_app.config
    parts: List[List[int]] = []
    info: Dict[str, Any] = {"fallback": False}

    for index, part in enumerate(game.parts):
        if mode == "mechanical" or (part.allow_duplicate and mode != "enhanced"):
            parts.append(generate_mechanical(part.min, part.max, part.size, part.allow_duplicate))
        elif mode == "optimized":
            res = generate_optimized(part.min, part.max, part.size, cfg["OPTIMIZED_MAX_ATTEMPTS"])
            info["fallback"] = info["fallback"] or res.fallback
            parts.append(res.numbers)
        elif mode == "balanced" and index == 0:
            draws = get_draws(game.id, cfg["HISTORY_LIMIT"])
            config = game.config.with_preferred_pairs(preferred_pairs_from_history(draws))
            stats = analyze_for_weights(draws, part.min, part.max)
            res = generate_balanced(part.min, part.max, part.size, stats, config,
                                    cfg["BALANCED_MAX_ATTEMPTS"])
            info["fallback"] = res.fallback
            info["attempts"] = res.attempts
            info["reasons"] = describe_combination(res.numbers, draws, config)
            parts.append(res.numbers)
        elif mode == "balanced":
            parts.append(generate_mechanical(part.min, part.max, part.size))
        else:
            parts.append(_enhanced_part(part))

    numbers: Any = parts[0] if game.kind == "matrix" else parts
    return {"game": game.name, "numbers": numbers, "type": game.kind, "mode": mode, **info}


@api_bp.get("/generate")
def api_generate():
    game = get_game(request.args.get("game"))
    if game is None:
        return _bad_request("Invalid game")

    mode = (request.args.get("mode") or "").strip().lower()
    if not mode:
        mode = "optimized" if request.args.get("smart") == "true" else "mechanical"
    if mode not in MODES:
        return _bad_request(f"unknown mode: {mode}")
    if mode == "balanced" and game.config is None:
        return _bad_request(f"balanced mode is not available for {game.name}")

    try:
        return jsonify(_generate(game, mode))
    except InvalidRangeError as e:
        current_app.logger.error("[api.generate] %s", e)
        return _bad_request(str(e))


@api_bp.get("/statistics")
@cache.cached(timeout=300, query_string=True, response_filter=_cache_ok)
def api_statistics():
    game = get_game(request.args.get("game"))
    if game is None:
        return _bad_request("Invalid game")

    try:
        limit = int(request.args.get("limit", 0))
    except ValueError:
        return _bad_request("limit must be an integer")
    if limit < 0:
        return _bad_request("limit must not be negative")

    part = game.main
    mid_point = game.config.mid_point if game.config else (part.min + part.max + 1) // 2
    draws = get_draws(game.id, limit or None)
    report = compute_statistics(draws, part.min, part.max, mid_point)
    report["predictions"] = prediction_scores(draws, part.min, part.max)
    report["game"] = game.id
    return jsonify(report)


@api_bp.get("/history")
def api_history():
    query = DrawHistory.query
    game_id = request.args.get("game")
    if game_id:
        query = query.filter_by(game=game_id)
    rows = query.order_by(DrawHistory.draw_date.desc(), DrawHistory.id.desc()).limit(50).all()
    return jsonify([r.as_dict() for r in rows])


@api_bp.post("/check-history")
def api_check_history():
    body: Dict[str, Any] = request.get_json(silent=True) or {}
    game = get_game(body.get("game"))
    numbers = body.get("numbers")
    if game is None or not numbers:
        return _bad_request("Missing game or numbers")
    if not isinstance(numbers, list):
        return _bad_request("numbers must be a list")
    try:
        numbers = [int(n) for n in numbers]
    except (TypeError, ValueError, OverflowError):
        return _bad_request("numbers must be integers")

    return jsonify({"match": check_history(game, numbers)})


@api_bp.post("/entropy")
def api_entropy():
    body: Dict[str, Any] = request.get_json(silent=True) or {}
    pool = current_app.extensions["entropy_pool"]
    try:
        sample = record_user_entropy(pool, body)
    except (TypeError, ValueError, OverflowError):
        return _bad_request("entropy fields must be numeric")
    return jsonify({"ok": True, "bytes": len(sample), "user_samples": pool.user_samples})
