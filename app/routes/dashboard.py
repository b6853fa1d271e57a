from flask import g
from flask_smorest import Blueprint

from app.schemas.dashboard import ChannelStatsResponseSchema
from app.schemas.video import ChannelVideoRequestSchema, VideoFeedResponseSchema
from app.services.dashboard_service import DashboardService
from common.decorator.auth_decorators import login_required
from common.query.pipeline_builder import FeedQuery

dashboard_blueprint = Blueprint(
    'dashboard',
    __name__,
    url_prefix='/api/v1/dashboard',
    description='채널 대시보드 API (본인 채널)'
)


@dashboard_blueprint.route('/stats', methods=['GET'])
@login_required
@dashboard_blueprint.response(200, ChannelStatsResponseSchema)
@dashboard_blueprint.doc(security=[{"BearerAuth": []}])
def get_channel_stats():
    return DashboardService.get_channel_stats(g.user_id)


@dashboard_blueprint.route('/videos', methods=['GET'])
@login_required
@dashboard_blueprint.arguments(ChannelVideoRequestSchema, location='query')
@dashboard_blueprint.response(200, VideoFeedResponseSchema)
@dashboard_blueprint.doc(security=[{"BearerAuth": []}])
def get_channel_videos(data):
    feed_query = FeedQuery(
        page=data['page'],
        limit=data['limit'],
        sort_by=data.get('sort_by'),
        sort_type=data.get('sort_type')
    )
    return DashboardService.get_channel_videos(g.user_id, feed_query)
