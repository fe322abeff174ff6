"""Write the OpenAPI document of the City Recipes service to docs/openapi.json."""

import json
from pathlib import Path

from fastapi.openapi.utils import get_openapi

from city_recipes.factory import create_app


app = create_app()

openapi_schema = get_openapi(
    title=app.title,
    version=app.version,
    description=app.description,
    routes=app.routes,
    servers=app.servers,
)

output = Path("docs/openapi.json")
output.parent.mkdir(parents=True, exist_ok=True)
with output.open("w") as f:
    json.dump(openapi_schema, f, indent=2)
