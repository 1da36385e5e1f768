"""View layer: rendering sink protocol, row events and the view binder."""
