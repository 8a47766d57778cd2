"""
QR code generation service
"""

import io
import qrcode

from table_manager.core.config import settings

class QRService:
    """Service for generating guest QR codes"""
    
    @staticmethod
    def get_guest_url(token: str) -> str:
        """URL a guest's QR code points to"""
        return f"{settings.BASE_URL}/guest/{token}"
    
    @staticmethod
    def generate_guest_qr(token: str, format: str = 'PNG') -> bytes:
        """Render the guest's QR code as image bytes"""
        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=10,
            border=4,
        )
        qr.add_data(QRService.get_guest_url(token))
        qr.make(fit=True)
        
        img = qr.make_image(fill_color="black", back_color="white")
        
        buffer = io.BytesIO()
        img.save(buffer, format=format)
        
        return buffer.getvalue()
