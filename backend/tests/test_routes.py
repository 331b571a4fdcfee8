from datetime import datetime
from urllib.parse import parse_qs, urlsplit

from bson import ObjectId

from weemeal.core.config import settings
from weemeal.models.image import ImageResult
from weemeal.services import recipe_image, tags

from conftest import APP_URL, bolognese

UNKNOWN_ID = str(ObjectId())


# ------------------------------
# CRUD
# ------------------------------

def test_create_and_get(client, created):
    assert created["name"] == "Spaghetti Bolognese"
    assert created["_id"]
    assert created["createdAt"] and created["updatedAt"]

    r = client.get(f"/recipes/{created['_id']}")
    assert r.status_code == 200
    body = r.json()
    assert body["_id"] == created["_id"]
    assert [c["contentType"] for c in body["ingredientListContent"]] == [
        "SECTION_CAPTION", "INGREDIENT", "INGREDIENT", "INGREDIENT",
    ]


def test_unknown_and_malformed_ids_are_404(client):
    for rid in (UNKNOWN_ID, "not-an-id"):
        r = client.get(f"/recipes/{rid}")
        assert r.status_code == 404
        assert r.json() == {"detail": "Recipe not found"}


def test_list_newest_first_and_filter_by_owner(client, collection):
    for i, (name, owner) in enumerate([("Alt", "u1"), ("Mittel", "u2"), ("Neu", "u1")]):
        collection.docs.append({
            "_id": ObjectId(), "name": name, "recipeYield": 2, "userId": owner,
            "createdAt": datetime(2024, 1, 1 + i), "updatedAt": datetime(2024, 1, 1 + i),
        })

    assert [r["name"] for r in client.get("/recipes").json()] == ["Neu", "Mittel", "Alt"]
    assert [r["name"] for r in client.get("/recipes", params={"userId": "u1"}).json()] == ["Neu", "Alt"]


def test_search_by_name(client):
    for name in ("Tomatensuppe", "Kartoffelsuppe", "Apfelkuchen"):
        client.post("/recipes", json=bolognese(name=name))

    r = client.get("/recipes", params={"search": "SUPPE"})
    assert [x["name"] for x in r.json()] == ["Kartoffelsuppe", "Tomatensuppe"]
    assert client.get("/recipes", params={"search": "(?"}).json() == []


def test_create_validation_error_shape(client):
    payload = bolognese()
    del payload["ingredientListContent"][1]["ingredientName"]
    r = client.post("/recipes", json=payload)
    assert r.status_code == 400
    body = r.json()
    assert body["error"] == "Validation failed"
    assert "ingredientListContent.1.ingredientName" in [d["field"] for d in body["details"]]


def test_update_partial(client, created):
    r = client.put(f"/recipes/{created['_id']}", json={"recipeYield": 6, "tags": ["Pasta"]})
    assert r.status_code == 200
    body = r.json()
    assert body["recipeYield"] == 6
    assert body["tags"] == ["Pasta"]
    assert body["name"] == created["name"]


def test_update_rejects_empty_payload(client, created):
    r = client.put(f"/recipes/{created['_id']}", json={})
    assert r.status_code == 400
    assert r.json()["details"][0]["message"] == "At least one field must be provided for update"


def test_update_unknown_is_404(client):
    assert client.put(f"/recipes/{UNKNOWN_ID}", json={"name": "x"}).status_code == 404


def test_delete(client, created):
    r = client.delete(f"/recipes/{created['_id']}")
    assert r.json() == {"success": True}
    assert client.get(f"/recipes/{created['_id']}").status_code == 404
    assert client.delete(f"/recipes/{created['_id']}").status_code == 404


# ------------------------------
# notes / source
# ------------------------------

def test_notes(client, created):
    r = client.patch(f"/recipes/{created['_id']}/notes", json={"notes": "Mit Rotwein ablöschen"})
    assert r.json() == {"success": True, "notes": "Mit Rotwein ablöschen"}
    assert client.patch(f"/recipes/{created['_id']}/notes", json={"notes": "x" * 5001}).status_code == 400


def test_source_set_and_clear(client, created, collection):
    rid = created["_id"]
    r = client.patch(f"/recipes/{rid}/source", json={"source": {"type": "book", "title": "Omas Küche"}})
    assert r.json()["source"] == {"type": "book", "title": "Omas Küche", "page": None}

    r = client.patch(f"/recipes/{rid}/source", json={"source": None})
    assert r.json() == {"success": True, "source": None}
    assert "source" not in collection.stored(rid)


# ------------------------------
# display / Bring!
# ------------------------------

def test_display_scales_to_requested_portions(client, created):
    r = client.get(f"/recipes/{created['_id']}/display", params={"portions": 6})
    assert r.status_code == 200
    body = r.json()
    assert body["portions"] == 6
    assert body["multiplier"] == 1.5

    items = body["ingredientListContent"]
    assert items[0] == {"contentId": "s1", "contentType": "SECTION_CAPTION", "position": 0, "sectionName": "Sauce"}
    assert (items[1]["amount"], items[1]["displayAmount"]) == (750, "750")
    assert (items[2]["amount"], items[2]["displayAmount"]) == (4.5, "4.5")
    assert items[3]["amount"] is None

    q = parse_qs(urlsplit(body["bringUrl"]).query)
    assert q["requestedQuantity"] == ["6"]
    assert q["baseQuantity"] == ["4"]


def test_display_with_huge_stored_amount(client):
    payload = bolognese()
    payload["ingredientListContent"][1]["amount"] = 1e27
    rid = client.post("/recipes", json=payload).json()["_id"]

    r = client.get(f"/recipes/{rid}/display", params={"portions": 4})
    assert r.status_code == 200
    assert r.json()["ingredientListContent"][1]["amount"] == 1e27


def test_display_defaults_to_yield(client, created):
    body = client.get(f"/recipes/{created['_id']}/display").json()
    assert body["portions"] == 4
    assert body["ingredientListContent"][1]["displayAmount"] == "500"


def test_display_rejects_out_of_range_portions(client, created):
    r = client.get(f"/recipes/{created['_id']}/display", params={"portions": 0})
    assert r.status_code == 400
    assert r.json()["details"][0]["field"] == "portions"


def test_bring_link(client, created):
    url = client.get(f"/recipes/{created['_id']}/bring-link", params={"portions": 2}).json()["url"]
    q = parse_qs(urlsplit(url).query)
    assert q["url"] == [f"{APP_URL}/recipes/bring/{created['_id']}"]
    assert q["requestedQuantity"] == ["2"]


def test_bring_link_without_app_url_uses_request_host(client, created, monkeypatch):
    monkeypatch.setattr(settings, "APP_URL", None)
    url = client.get(f"/recipes/{created['_id']}/bring-link").json()["url"]
    assert parse_qs(urlsplit(url).query)["url"] == [f"http://testserver/recipes/bring/{created['_id']}"]


def test_bring_export_page(client, created):
    r = client.get(f"/recipes/bring/{created['_id']}")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    assert r.headers["cache-control"] == "public, max-age=3600"
    assert "application/ld+json" in r.text
    assert client.get(f"/recipes/bring/{UNKNOWN_ID}").status_code == 404


# ------------------------------
# images
# ------------------------------

def _fake_resolver(calls):
    async def resolve(name):
        calls.append(name)
        return ImageResult(url=f"https://images.example/{len(calls)}.jpg", attribution="Photo by A on Unsplash",
                           source="unsplash")
    return resolve


def test_image_stored_is_returned(client, collection):
    r = client.post("/recipes", json=bolognese(imageUrl="https://cdn.example/own.jpg"))
    body = client.get(f"/recipes/{r.json()['_id']}/image").json()
    assert body == {"imageUrl": "https://cdn.example/own.jpg", "source": "stored"}


def test_image_regenerate_with_override_name(client, created, monkeypatch):
    calls = []
    monkeypatch.setattr(recipe_image, "get_recipe_image", _fake_resolver(calls))
    body = client.get(f"/recipes/{created['_id']}/image", params={"regenerate": "true", "name": "Linsensuppe"}).json()
    assert calls == ["Linsensuppe"]
    assert body["source"] == "unsplash"
    assert body["attribution"] == "Photo by A on Unsplash"


def test_image_without_collaborators_is_placeholder(client, created):
    body = client.get(f"/recipes/{created['_id']}/image").json()
    assert body["source"] == "placeholder"
    assert body["imageUrl"].startswith("data:image/svg+xml,")


def test_image_save_custom_and_resolved(client, created, collection, monkeypatch):
    rid = created["_id"]
    r = client.post(f"/recipes/{rid}/image", json={"imageUrl": "https://cdn.example/mine.jpg"})
    assert r.json()["source"] == "custom"
    assert collection.stored(rid)["imageUrl"] == "https://cdn.example/mine.jpg"

    calls = []
    monkeypatch.setattr(recipe_image, "get_recipe_image", _fake_resolver(calls))
    r = client.post(f"/recipes/{rid}/image")
    assert r.json()["message"] == "Image saved successfully"
    assert calls == ["Spaghetti Bolognese"]
    assert collection.stored(rid)["imageUrl"] == "https://images.example/1.jpg"


def test_image_delete(client, collection):
    rid = client.post("/recipes", json=bolognese(imageUrl="https://cdn.example/own.jpg")).json()["_id"]
    r = client.delete(f"/recipes/{rid}/image")
    assert r.json() == {"message": "Image removed successfully"}
    assert "imageUrl" not in collection.stored(rid)
    assert client.delete(f"/recipes/{UNKNOWN_ID}/image").status_code == 404


# ------------------------------
# tags / health
# ------------------------------

def test_generate_tags_passes_named_ingredients(client, monkeypatch):
    seen = {}

    async def fake(name, names):
        seen["args"] = (name, names)
        return ["Suppe"]

    monkeypatch.setattr(tags, "generate_recipe_tags", fake)
    r = client.post("/recipes/generate-tags", json={
        "name": " Tomatensuppe ",
        "ingredients": [
            {"contentType": "SECTION_CAPTION", "sectionName": "Basis"},
            {"contentType": "INGREDIENT", "ingredientName": "Tomaten"},
            {"contentType": "INGREDIENT", "ingredientName": ""},
        ],
    })
    assert r.json() == {"tags": ["Suppe"]}
    assert seen["args"] == ("Tomatensuppe", ["Tomaten"])


def test_generate_tags_keyword_fallback(client):
    r = client.post("/recipes/generate-tags", json={"name": "Gurkensalat", "ingredients": []})
    assert r.json() == {"tags": ["Salat"]}


def test_generate_tags_requires_name(client):
    assert client.post("/recipes/generate-tags", json={"ingredients": []}).status_code == 400


def test_root_and_health(client):
    assert client.get("/").json() == {"status": "ok"}
    body = client.get("/health").json()
    assert body["status"] == "ok"
    assert body["db"].startswith("error")
