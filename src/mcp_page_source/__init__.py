"""
MCP server that hands a tool-calling agent the state of its browser tab as
bounded, deterministic text.

Three read-only tools carry the weight:

* ``get_html_source`` serializes the live document, filters it (tag
  exclusion, region selection, comment stripping, compression or
  pretty-printing) and returns a resumable character window of the result.
* ``get_request_info`` rebuilds the tab's top-level navigation request,
  together with the cookies that apply to it, as a ``curl`` command.
* ``network_requests`` lists every request recorded since the page loaded.

## Known Limitation: Tag Exclusion Is Destructive

``exclude_tags`` removes the matching elements from the live page, not from a
copy. A later call against the same page will not see them again until the
page is reloaded or navigated.

## Known Limitation: One Recorder Per Tab

Request capture attaches a listener to the tab's request stream for the
duration of a reload. Tools that touch the browser are serialized through a
single in-process lock, so two captures never overlap.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
