"""Python client for the advocate directory API.

Pairs a page cache (AdvocatePager) with a windowed list model
(InfiniteList) so scripts and tests can drive the same infinite-scroll
contract the browser UI uses.
"""

from client.api import AdvocatesClient, AdvocatesClientError
from client.infinite_list import InfiniteList, RenderPlan, VirtualRow
from client.models import FilterKey, FilterOptions, PageResult
from client.pager import AdvocatePager

__all__ = [
    "AdvocatesClient",
    "AdvocatesClientError",
    "AdvocatePager",
    "FilterKey",
    "FilterOptions",
    "InfiniteList",
    "PageResult",
    "RenderPlan",
    "VirtualRow",
]
