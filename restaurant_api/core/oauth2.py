from fastapi.security import HTTPBearer

# Reads "Authorization: Bearer <token>", missing headers are reported by get_current_principal
bearer_scheme = HTTPBearer(auto_error=False)
