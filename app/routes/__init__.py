"""
Routes package
Flask Blueprint들을 관리하는 패키지
"""

from app.routes.video import video_blueprint
from app.routes.comment import comment_blueprint
from app.routes.like import like_blueprint
from app.routes.subscription import subscription_blueprint
from app.routes.dashboard import dashboard_blueprint
from app.routes.base import base_blueprint

__all__ = [
    'video_blueprint',
    'comment_blueprint',
    'like_blueprint',
    'subscription_blueprint',
    'dashboard_blueprint',
    'base_blueprint'
]
