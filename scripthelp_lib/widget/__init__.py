from .background import PHONE_SIZES, CropRect, widget_crop_rect, set_transparent_background

__all__ = ["PHONE_SIZES", "CropRect", "widget_crop_rect", "set_transparent_background"]
