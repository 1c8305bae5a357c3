"""One-shot wrappers around the host alert and notification primitives."""
from __future__ import annotations
import logging
from typing import Any, Callable, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from scripthelp_lib.host.alert import Alert
from scripthelp_lib.host.interfaces import AlertProtocol, NotificationProtocol
from scripthelp_lib.host.notification import Notification

logger = logging.getLogger(__name__)

NotificationSound = Literal[
    'default', 'accept', 'alert', 'complete', 'event', 'failure', 'piano_error', 'piano_success', 'popup'
]


class ActionItem(BaseModel):
    text: str
    # 'warn' renders the action as destructive
    type: Literal['normal', 'warn'] = 'normal'


class ShowActionSheetParams(BaseModel):
    title: Optional[str] = None
    desc: Optional[str] = None
    cancel_text: str = 'Cancel'
    item_list: List[Union[str, ActionItem]]


class InputItem(BaseModel):
    type: Literal['text', 'password'] = 'text'
    text: str = ''
    placeholder: str = ''


class ShowModalParams(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    input_items: List[InputItem] = Field(default_factory=list)
    show_cancel: bool = True
    cancel_text: str = 'Cancel'
    confirm_text: str = 'OK'


class ShowModalRes(BaseModel):
    confirm: bool
    cancel: bool
    texts: List[str] = Field(default_factory=list)


class ShowNotificationParams(BaseModel):
    model_config = ConfigDict(extra='allow')

    title: str
    subtitle: str = ''
    body: str = ''
    sound: NotificationSound = 'default'
    open_url: Optional[str] = None


def show_action_sheet(
    params: Union[ShowActionSheetParams, Dict[str, Any]],
    alert_factory: Callable[[], AlertProtocol] = Alert,
) -> int:
    """Present a choice list; return the tapped index, -1 when cancelled."""
    params = ShowActionSheetParams.model_validate(params)
    alert = alert_factory()
    if params.title:
        alert.title = params.title
    if params.desc:
        alert.message = params.desc
    for item in params.item_list:
        if isinstance(item, str):
            alert.add_action(item)
        elif item.type == 'warn':
            alert.add_destructive_action(item.text)
        else:
            alert.add_action(item.text)
    alert.add_cancel_action(params.cancel_text)
    return alert.present_sheet()


def show_modal(
    params: Union[ShowModalParams, Dict[str, Any]],
    alert_factory: Callable[[], AlertProtocol] = Alert,
) -> ShowModalRes:
    params = ShowModalParams.model_validate(params)
    alert = alert_factory()
    if params.title:
        alert.title = params.title
    if params.content:
        alert.message = params.content
    if params.show_cancel and params.cancel_text:
        alert.add_cancel_action(params.cancel_text)
    alert.add_action(params.confirm_text)

    for item in params.input_items:
        if item.type == 'password':
            alert.add_secure_text_field(item.placeholder, item.text)
        else:
            alert.add_text_field(item.placeholder, item.text)

    tap_index = alert.present_alert()
    texts = [alert.text_field_value(i) for i in range(len(params.input_items))]
    cancelled = tap_index == -1
    return ShowModalRes(confirm=not cancelled, cancel=cancelled, texts=texts)


def show_notification(
    params: Union[ShowNotificationParams, Dict[str, Any]],
    notification_factory: Callable[[], NotificationProtocol] = Notification,
) -> None:
    params = ShowNotificationParams.model_validate(params)
    notification = notification_factory()
    notification.title = params.title
    notification.subtitle = params.subtitle
    notification.body = params.body
    if params.open_url:
        notification.open_url = params.open_url
    notification.sound = params.sound
    for key, value in (params.model_extra or {}).items():
        setattr(notification, key, value)
    logger.debug("Scheduling notification %r", params.title)
    notification.schedule()
