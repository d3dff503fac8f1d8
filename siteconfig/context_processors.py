from .models import SiteConfiguration


def site_config(request):
    config = SiteConfiguration.current()
    return {
        "siteconfig": config,
        "club_name": config.club_name if config else "Aeroclub",
    }
