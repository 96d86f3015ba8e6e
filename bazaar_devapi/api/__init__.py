"""HTTP surface: callback middleware, routes and error mapping."""
