"""Resize geometry shared by local and CDN rendering."""

import math


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def constrain_dimensions(
    current_w: int, current_h: int, max_w: int = 0, max_h: int = 0
) -> tuple[int, int]:
    """Scale (current_w, current_h) down to fit inside the box, keeping aspect ratio.

    A max of 0 leaves that side unconstrained. Never upscales.
    """
    if not max_w and not max_h:
        return current_w, current_h

    width_ratio = height_ratio = 1.0
    did_width = did_height = False

    if max_w > 0 and current_w > 0 and current_w > max_w:
        width_ratio = max_w / current_w
        did_width = True

    if max_h > 0 and current_h > 0 and current_h > max_h:
        height_ratio = max_h / current_h
        did_height = True

    smaller_ratio = min(width_ratio, height_ratio)
    larger_ratio = max(width_ratio, height_ratio)

    if (
        _round_half_up(current_w * larger_ratio) > max_w
        or _round_half_up(current_h * larger_ratio) > max_h
    ):
        ratio = smaller_ratio
    else:
        ratio = larger_ratio

    w = max(1, _round_half_up(current_w * ratio))
    h = max(1, _round_half_up(current_h * ratio))

    # Rounding can land one pixel short of the box edge.
    if did_width and w == max_w - 1:
        w = max_w
    if did_height and h == max_h - 1:
        h = max_h

    return w, h


def image_resize_dimensions(
    orig_w: int, orig_h: int, dest_w: int, dest_h: int, crop: bool = False
) -> tuple[int, int, int, int, int, int, int, int] | None:
    """Compute the geometry for resizing an image.

    Returns ``(dst_x, dst_y, src_x, src_y, dst_w, dst_h, src_w, src_h)``, or
    None when there is nothing to do: bad input, or a result that would not be
    smaller than the original.

    With ``crop`` the result fills dest_w x dest_h exactly, cropping the
    centre of the source; otherwise it fits inside the box.
    """
    if orig_w <= 0 or orig_h <= 0:
        return None
    if dest_w <= 0 and dest_h <= 0:
        return None

    if crop:
        aspect_ratio = orig_w / orig_h
        new_w = min(dest_w, orig_w)
        new_h = min(dest_h, orig_h)

        if not new_w:
            new_w = _round_half_up(new_h * aspect_ratio)
        if not new_h:
            new_h = _round_half_up(new_w / aspect_ratio)

        size_ratio = max(new_w / orig_w, new_h / orig_h)
        crop_w = _round_half_up(new_w / size_ratio)
        crop_h = _round_half_up(new_h / size_ratio)

        s_x = math.floor((orig_w - crop_w) / 2)
        s_y = math.floor((orig_h - crop_h) / 2)
    else:
        crop_w, crop_h = orig_w, orig_h
        s_x = s_y = 0
        new_w, new_h = constrain_dimensions(orig_w, orig_h, dest_w, dest_h)

    if new_w >= orig_w and new_h >= orig_h:
        return None

    return 0, 0, int(s_x), int(s_y), int(new_w), int(new_h), int(crop_w), int(crop_h)
