from shortlinks.models.url_mapping_model import URLMappingModel


__all__ = ['URLMappingModel']
