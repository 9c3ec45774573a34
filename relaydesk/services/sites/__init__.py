"""已知站点目录服务."""

from .site_directory import SiteDirectory, get_site_directory

__all__ = ["SiteDirectory", "get_site_directory"]
