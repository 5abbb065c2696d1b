from fastapi import FastAPI, Query
from pydantic import BaseModel
from starlette.responses import PlainTextResponse


class UserRequest(BaseModel):
    name: str
    age: int


class Item(BaseModel):
    title: str
    price: float
    tags: list[str] = []


app = FastAPI(title="Sample API", openapi_url=None, docs_url=None, redoc_url=None)


@app.get("/users")
def list_users(page: int = 0, size: int = Query(10, alias="pageSize")):
    return []


@app.post("/users")
def create_user(user: UserRequest):
    return user


@app.get("/users/{user_id}")
def get_user(user_id: int):
    return {"id": user_id}


@app.api_route("/items/{item_id}", methods=["PUT", "PATCH"])
def update_item(item_id: int, item: Item):
    return item


def health(request):
    return PlainTextResponse("ok")


async def static_files(scope, receive, send):
    pass


app.add_route("/health", health, methods=["GET"])
app.mount("/static", static_files)
