"""
Tu Casa en Subasta - source root

The application lives in the ``subasta`` package: auction calendars,
foreclosure listings, the ATTOM sync pipeline and the HTTP API.
"""
