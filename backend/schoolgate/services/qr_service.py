# backend/schoolgate/services/qr_service.py
"""QR code image rendering for printed badges."""
import qrcode
import io
import base64

class QRService:
    """Service for QR code operations."""
    
    @staticmethod
    def render_badge(code: str) -> str:
        """
        Render a badge code as a PNG QR image.
        Returns: data URI with the base64 PNG
        """
        qr = qrcode.QRCode(
            version=None,  # Auto-determine size
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=10,
            border=4,
        )
        qr.add_data(code)
        qr.make(fit=True)
        
        img = qr.make_image(fill_color="black", back_color="white")
        
        buffered = io.BytesIO()
        img.save(buffered, format="PNG")
        img_str = base64.b64encode(buffered.getvalue()).decode()
        
        return f"data:image/png;base64,{img_str}"
