"""
Controller SDK, one module per REST resource family.

Functions take a :class:`drycc_cli.client.Client` first, issue the
request and return pydantic models from :mod:`.models`. List calls
return ``(items, total_count)``.
"""
