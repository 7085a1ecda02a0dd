from flask import Flask, send_from_directory

from . import config
from .controllers.pipeline_controller import PipelineController
from .errors import CityInputError
from .logic.city_index import load_cities
from .routes.cities import cities_bp
from .routes.env import env_bp
from .routes.pipeline import pipeline_bp
from .utils.city_loader import read_city_dataset
from .utils.logger import log
from .utils.scheduler import start_scheduler


def load_city_index(path: str = config.CITY_DATA_PATH):
    """(도시 목록, 오류 메시지) 반환. 로드 실패해도 서버는 뜬다."""
    try:
        cities = load_cities(read_city_dataset(path))
    except CityInputError as e:
        log(f"❌ 도시 데이터 로드 실패: {e}", level="error")
        return [], str(e)
    log(f"🏙 도시 {len(cities)}개 로드")
    return cities, None


def create_app(cities=None, controller=None, with_scheduler: bool = True) -> Flask:
    app = Flask(__name__)

    city_error = None
    if cities is None:
        cities, city_error = load_city_index()

    app.config["CITY_INDEX"] = cities
    app.config["CITY_ERROR"] = city_error
    app.config["PIPELINE"] = controller or PipelineController(cities=cities)

    app.register_blueprint(cities_bp)
    app.register_blueprint(pipeline_bp)
    app.register_blueprint(env_bp)

    @app.route("/img/<path:file_name>")
    def generated_image(file_name):
        return send_from_directory(config.IMAGE_FOLDER, file_name)

    @app.route("/")
    def home():
        return "✅ City weather imager 작동 중"

    if with_scheduler:
        start_scheduler()  # ✅ 여기에서 한 번만 실행

    return app
