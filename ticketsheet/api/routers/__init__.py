"""Route modules mounted by :func:`ticketsheet.api.app.create_app`."""
