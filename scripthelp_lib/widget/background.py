"""Crop a home-screen screenshot to a widget's frame for a "transparent" background.

`PHONE_SIZES` is keyed by screenshot height in pixels. Each entry gives the
edge lengths of the small/medium/large widgets and the offsets of the widget
columns (left/right) and rows (top/middle/bottom).
"""
from __future__ import annotations
import logging
import webbrowser
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from PIL import Image

from scripthelp_lib.dialogs import show_action_sheet, show_modal
from scripthelp_lib.host.alert import Alert
from scripthelp_lib.host.image import crop_image
from scripthelp_lib.host.interfaces import AlertProtocol, PhotoLibraryProtocol

logger = logging.getLogger(__name__)

HELP_URL = 'https://support.qq.com/products/287371'

PHONE_SIZES: Dict[int, Dict[str, int]] = {
    # 12 Pro Max
    2778: dict(small=510, medium=1092, large=1146, left=96, right=678, top=246, middle=882, bottom=1518),
    # 12 and 12 Pro
    2532: dict(small=474, medium=1014, large=1062, left=78, right=618, top=231, middle=819, bottom=1407),
    # 11 Pro Max, XS Max
    2688: dict(small=507, medium=1080, large=1137, left=81, right=654, top=228, middle=858, bottom=1488),
    # 11, XR
    1792: dict(small=338, medium=720, large=758, left=54, right=436, top=160, middle=580, bottom=1000),
    # 11 Pro, XS, X
    2436: dict(small=465, medium=987, large=1035, left=69, right=591, top=213, middle=783, bottom=1353),
    # Plus phones
    2208: dict(small=471, medium=1044, large=1071, left=99, right=672, top=114, middle=696, bottom=1278),
    # SE2 and 6/6S/7/8
    1334: dict(small=296, medium=642, large=648, left=54, right=400, top=60, middle=412, bottom=764),
    # SE1: only two rows, middle and bottom coincide
    1136: dict(small=282, medium=584, large=622, left=30, right=332, top=59, middle=399, bottom=399),
    # 11 and XR in Display Zoom mode
    1624: dict(small=310, medium=658, large=690, left=46, right=394, top=142, middle=522, bottom=902),
    # Plus in Display Zoom mode
    2001: dict(small=444, medium=963, large=972, left=81, right=600, top=90, middle=618, bottom=1146),
}

WIDGET_SIZES: List[Tuple[str, str]] = [('small', 'Small'), ('medium', 'Medium'), ('large', 'Large')]

POSITIONS: Dict[str, List[Tuple[str, str]]] = {
    'small': [
        ('top left', 'Top left'),
        ('top right', 'Top right'),
        ('middle left', 'Middle left'),
        ('middle right', 'Middle right'),
        ('bottom left', 'Bottom left'),
        ('bottom right', 'Bottom right'),
    ],
    'medium': [('top', 'Top'), ('middle', 'Middle'), ('bottom', 'Bottom')],
    'large': [('top', 'Top'), ('bottom', 'Bottom')],
}


@dataclass(frozen=True)
class CropRect:
    x: int
    y: int
    width: int
    height: int


def widget_crop_rect(phone: Dict[str, int], size: str, position: str) -> CropRect:
    """Rectangle of the widget slot `position` for a widget of `size`.

    Small positions are "<row> <column>", e.g. "middle right"; medium and
    large widgets span the full width so only the row is given.
    """
    if size == 'small':
        row, column = position.split(' ')
        return CropRect(x=phone[column], y=phone[row], width=phone['small'], height=phone['small'])
    if size == 'medium':
        return CropRect(x=phone['left'], y=phone[position], width=phone['medium'], height=phone['small'])
    if size == 'large':
        return CropRect(x=phone['left'], y=phone[position], width=phone['medium'], height=phone['large'])
    raise ValueError(f"Unknown widget size: {size}")


def _pick(options: List[Tuple[str, str]], index: int) -> Optional[str]:
    if 0 <= index < len(options):
        return options[index][0]
    return None


def set_transparent_background(
    tips: Optional[str] = None,
    *,
    alert_factory: Callable[[], AlertProtocol] = Alert,
    photos: PhotoLibraryProtocol,
    open_url: Callable[[str], object] = webbrowser.open,
) -> Optional[Image.Image]:
    """Walk the user through cropping a screenshot; None if they leave the flow."""
    ready = show_modal(
        {
            'content': tips or 'Before starting, go to your home screen and take a screenshot '
                               'of an empty page. Then come back and continue.',
            'cancel_text': 'I have a screenshot',
            'confirm_text': 'Take screenshot >',
        },
        alert_factory,
    )
    if not ready.cancel:
        return None

    img = photos.from_library()
    img_height = img.size[1]
    phone = PHONE_SIZES.get(img_height)
    if not phone:
        logger.info("Unsupported screenshot height %d", img_height)
        help_res = show_modal(
            {
                'content': 'This does not look like a home screen screenshot, or your device '
                           'is not supported yet. Tap Help to visit the community.',
                'confirm_text': 'Help',
                'cancel_text': 'Cancel',
            },
            alert_factory,
        )
        if help_res.confirm:
            open_url(HELP_URL)
        return None

    size = _pick(WIDGET_SIZES, show_action_sheet(
        {'title': 'Which widget size will you use?', 'item_list': [label for _, label in WIDGET_SIZES]},
        alert_factory,
    ))
    if size is None:
        return None

    positions = POSITIONS[size]
    desc = (' (This device only fits two rows of small widgets, so "Middle" and "Bottom" are the same.)'
            if img_height == 1136 else '')
    position = _pick(positions, show_action_sheet(
        {
            'title': 'Where will the widget go on the home screen?',
            'desc': desc,
            'item_list': [label for _, label in positions],
        },
        alert_factory,
    ))
    if position is None:
        return None

    rect = widget_crop_rect(phone, size, position)
    return crop_image(img, rect.x, rect.y, rect.width, rect.height)
