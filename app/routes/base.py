from datetime import datetime

from flask_smorest import Blueprint

base_blueprint = Blueprint(
    'base',
    __name__,
    url_prefix='/',
    description='헬스 체크'
)

@base_blueprint.route('', methods = ['GET'])
def base_endpoint():
    return {
        "status": "ok",
        "service": "engagement",
        "time": datetime.now().isoformat()
    }
