from flask_smorest import Api

api = Api()

redis_client = None

mongo_client = None
mongo_db = None

document_store = None

media_storage = None
