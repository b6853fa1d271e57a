from flask import g
from flask_smorest import Blueprint

from app.schemas.subscription import (
    SubscribedChannelListResponseSchema,
    SubscriberListResponseSchema,
    ToggleSubscriptionResponseSchema
)
from app.services.subscription_service import SubscriptionService
from common.decorator.auth_decorators import login_required, login_optional

subscription_blueprint = Blueprint(
    'subscription',
    __name__,
    url_prefix='/api/v1/subscriptions',
    description='채널 구독 API'
)


@subscription_blueprint.route('/c/<channel_id>', methods=['POST'])
@login_required
@subscription_blueprint.response(200, ToggleSubscriptionResponseSchema)
@subscription_blueprint.doc(security=[{"BearerAuth": []}])
def toggle_subscription(channel_id):
    return SubscriptionService.toggle_subscription(g.user_id, channel_id)


@subscription_blueprint.route('/c/<channel_id>', methods=['GET'])
@login_optional
@subscription_blueprint.response(200, SubscriberListResponseSchema)
@subscription_blueprint.doc(security=[{"BearerAuth": []}])
def get_subscribers(channel_id):
    return SubscriptionService.get_subscribers(channel_id)


@subscription_blueprint.route('/u/<subscriber_id>', methods=['GET'])
@login_optional
@subscription_blueprint.response(200, SubscribedChannelListResponseSchema)
@subscription_blueprint.doc(security=[{"BearerAuth": []}])
def get_subscribed_channels(subscriber_id):
    return SubscriptionService.get_subscribed_channels(subscriber_id)
