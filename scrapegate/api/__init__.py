"""HTTP surface: metrics handler, exposition, middleware, landing page."""
