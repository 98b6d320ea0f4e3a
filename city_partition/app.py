# app.py — Flask API over the city generator (generate / switch metric / previews)
# deps: pip install flask numpy pillow

from __future__ import annotations
from typing import Optional
import io, logging

from flask import Flask, request, jsonify, make_response
from PIL import Image

from city_partition.generator import CityGenerator
from city_partition.grid import grid_to_rgb
from city_partition.metrics import compute_grid_metrics
from city_partition.models import CityConfig, CityGrid, ConfigError

logger = logging.getLogger(__name__)


# region Rendering
def render_png(grid: CityGrid, scale: int = 1) -> bytes:
    img = Image.fromarray(grid_to_rgb(grid), "RGB")
    if scale > 1:
        img = img.resize((grid.width * scale, grid.height * scale), Image.NEAREST)
    buf = io.BytesIO()
    img.save(buf, "PNG")
    return buf.getvalue()
# endregion


def create_app(generator: Optional[CityGenerator] = None) -> Flask:
    app = Flask(__name__)
    app.config["CITY_GENERATOR"] = generator or CityGenerator()

    def gen() -> CityGenerator:
        return app.config["CITY_GENERATOR"]

    def json_body() -> dict:
        data = request.get_json(force=True, silent=True)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError("Request body must be a JSON object")
        return data

    def no_city():
        return jsonify({"error": "No city generated yet. POST /city/generate first."}), 404

    # ======= CORS =======
    @app.after_request
    def _cors(resp):
        resp.headers["Access-Control-Allow-Origin"]  = "*"
        resp.headers["Access-Control-Allow-Headers"] = "*"
        resp.headers["Access-Control-Allow-Methods"] = "GET,POST,OPTIONS"
        return resp

    @app.errorhandler(ConfigError)
    def _config_error(e):
        logger.warning("Rejected configuration: %s", e)
        return jsonify({"error": str(e)}), 400

    @app.route("/", methods=["GET"])
    def root():
        return {"ok": True, "metric": gen().metric.value, "generate": "/city/generate (POST JSON)"}

    # ======= generation API =======
    @app.route("/city/generate", methods=["POST"])
    def city_generate():
        """
        JSON body (all optional; a non-empty body reconfigures the session):
        {
          "width": 100, "height": 100,
          "site_count": null, "min_sites": 4, "max_sites": 12,
          "seed": 651321525,
          "metric": "euclidean" | "manhattan",
          "block_size": 8,
          "major_road_thickness": 0,
          "suppress_border_near_road": false,
          "height_jitter": true, "height_range": [1.0, 10.0],
          "scale_divisor": 1.0, "emit_roads": true,
          "site_categories": ["residential", "park", ...]
        }
        """
        data = json_body()
        if data:
            gen().configure(CityConfig.from_dict(data))
        result = gen().generate()
        resp = compute_grid_metrics(result.grid)
        resp.update({"generation": result.generation, "placements": len(result.placements)})
        return jsonify(resp)

    @app.route("/city/metric", methods=["POST"])
    def city_metric():
        data = json_body()
        if data.get("metric"):
            metric = gen().set_metric(data["metric"])
        else:
            metric = gen().toggle_metric()
        return jsonify({"metric": metric.value})

    # ======= result views =======
    @app.route("/city/summary", methods=["GET"])
    def city_summary():
        result = gen().result
        if result is None:
            return no_city()
        resp = compute_grid_metrics(result.grid)
        resp.update({"generation": result.generation, "config": result.config.to_dict(),
                     "site_points": [{"x": s.x, "y": s.y, "category": s.category.name.lower()}
                               for s in result.grid.sites]})
        return jsonify(resp)

    @app.route("/city/placements", methods=["GET"])
    def city_placements():
        result = gen().result
        if result is None:
            return no_city()
        return jsonify({"generation": result.generation,
                        "placements": [p.to_dict() for p in result.placements]})

    @app.route("/city/map.png", methods=["GET"])
    def city_map():
        result = gen().result
        if result is None:
            return no_city()
        try:
            scale = max(1, int(request.args.get("scale", "1")))
        except ValueError:
            return jsonify({"error": "scale must be an integer"}), 400
        resp = make_response(render_png(result.grid, scale))
        resp.headers["Content-Type"] = "image/png"
        return resp

    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    create_app().run(host="0.0.0.0", port=8081, threaded=True)
