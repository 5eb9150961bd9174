"""HTTP value types: Request, Response, Redirect, Headers, QueryParams."""
