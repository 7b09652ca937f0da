import base64
import io
import json
import zipfile
from typing import Iterable

import qrcode


def qr_payload(item) -> dict:
    """Canonical data encoded in an item's QR code."""
    return {"id": str(item.id), "type": item.item_type, "vendor": item.vendor_name}


def qr_png(payload: dict) -> bytes:
    qr = qrcode.QRCode(version=1, box_size=10, border=4)
    qr.add_data(json.dumps(payload, separators=(",", ":")))
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def qr_data_url(payload: dict) -> str:
    return "data:image/png;base64," + base64.b64encode(qr_png(payload)).decode()


def qr_archive(items: Iterable) -> bytes:
    """ZIP archive with one ``{id}.png`` QR code per item."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        for item in items:
            zf.writestr(f"{item.id}.png", qr_png(qr_payload(item)))
    return buf.getvalue()
