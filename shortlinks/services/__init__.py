from shortlinks.services.shortening_service import ShorteningService
from shortlinks.services.factory import service_from_config


__all__ = ['ShorteningService', 'service_from_config']
