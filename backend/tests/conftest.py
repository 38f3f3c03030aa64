import itertools

import httpx
import pytest
from fastapi.testclient import TestClient

from app.adapters.fake_store import FakeStoreClient
from app.adapters.random_user import RandomUserClient
from app.config import Settings
from app.db import Database
from app.main import create_app
from app.services.seed_service import SeedService

RANDOM_USER_URL = "https://randomuser.test/api/"
PRODUCTS_API_URL = "https://fakestore.test/products"

FJALLRAVEN = "Fjallraven - Foldsack No. 1 Backpack, Fits 15 Laptops"

_CATALOGUE_ROWS = [
    (FJALLRAVEN, 109.95, "men's clothing", "Your perfect pack for everyday use and walks in the forest."),
    ("Mens Casual Premium Slim Fit T-Shirts ", 22.3, "men's clothing", "Slim-fitting style, contrast raglan long sleeve."),
    ("Mens Cotton Jacket", 55.99, "men's clothing", "Great outerwear jackets for Spring/Autumn/Winter."),
    ("Mens Casual Slim Fit", 15.99, "men's clothing", "The color could be slightly different between on the screen and in practice."),
    ("John Hardy Women's Legends Naga Gold & Silver Dragon Station Chain Bracelet", 695, "jewelery", "From our Legends Collection, inspired by the mythical water dragon."),
    ("Solid Gold Petite Micropave ", 168, "jewelery", "Satisfaction guaranteed. Return or exchange any order within 30 days."),
    ("White Gold Plated Princess", 9.99, "jewelery", "Classic created wedding engagement solitaire diamond promise ring."),
    ("Pierced Owl Rose Gold Plated Stainless Steel Double", 10.99, "jewelery", "Rose gold plated double flared tunnel plug earrings."),
    ("WD 2TB Elements Portable External Hard Drive - USB 3.0 ", 64, "electronics", "USB 3.0 and USB 2.0 compatibility, fast data transfers."),
    ("SanDisk SSD PLUS 1TB Internal SSD - SATA III 6 Gb/s", 109, "electronics", "Easy upgrade for faster boot up, shutdown, application load and response."),
    ("Silicon Power 256GB SSD 3D NAND A55 SLC Cache Performance Boost SATA III 2.5", 109, "electronics", "3D NAND flash are applied to deliver high transfer speeds."),
    ("WD 4TB Gaming Drive Works with Playstation 4 Portable External Hard Drive", 114, "electronics", "Expand your PS4 gaming experience, play anywhere."),
    ("Acer SB220Q bi 21.5 inches Full HD (1920 x 1080) IPS Ultra-Thin", 599, "electronics", "21.5 inches Full HD widescreen IPS display."),
    ("Samsung 49-Inch CHG90 144Hz Curved Gaming Monitor (LC49HG90DMNXZA) Super Ultrawide Screen QLED ", 999.99, "electronics", "49 inch super ultrawide 32:9 curved gaming monitor."),
    ("BIYLACLESEN Women's 3-in-1 Snowboard Jacket Winter Coats", 56.99, "women's clothing", "Detachable liner fabric, warm fleece."),
    ("Lock and Love Women's Removable Hooded Faux Leather Moto Biker Jacket", 29.95, "women's clothing", "100% polyurethane shell, 100% polyester lining."),
    ("Rain Jacket Women Windbreaker Striped Climbing Raincoats", 39.99, "women's clothing", "Lightweight perfect for trip or casual wear."),
    ("MBJ Women's Solid Short Sleeve Boat Neck V ", 9.85, "women's clothing", "95% rayon 5% spandex, made in USA or imported."),
    ("Opna Women's Short Sleeve Moisture", 7.95, "women's clothing", "100% polyester, machine wash, lightweight."),
    ("DANVOUY Womens T Shirt Casual Cotton Short", 12.99, "women's clothing", "95% cotton, 5% spandex, casual v-neck."),
]

CATALOGUE = [
    {
        "id": i,
        "title": title,
        "price": price,
        "description": description,
        "category": category,
        "image": f"https://fakestore.test/img/{i}.jpg",
        "rating": {"rate": round(2.0 + (i % 30) / 10, 1), "count": 100 + i},
    }
    for i, (title, price, category, description) in enumerate(_CATALOGUE_ROWS, start=1)
]


class FakeUpstream:
    """
    Stands in for randomuser.me and fakestoreapi.com.

    `usernames` is consumed first when set; otherwise usernames are generated.
    `fail_user_call` makes the n-th identity request (1-based) answer 500.
    """

    def __init__(self):
        self.catalogue = list(CATALOGUE)
        self.usernames = []
        self.fail_user_call = None
        self.fail_products = False
        self.user_calls = 0
        self.product_calls = 0
        self._seq = itertools.count(1)
        self.transport = httpx.MockTransport(self.handler)

    def handler(self, request: httpx.Request) -> httpx.Response:
        if str(request.url) == RANDOM_USER_URL:
            self.user_calls += 1
            if self.fail_user_call == self.user_calls:
                return httpx.Response(500, json={"error": "upstream down"})
            n = next(self._seq)
            username = self.usernames.pop(0) if self.usernames else f"user{n}"
            return httpx.Response(200, json={
                "results": [{
                    "login": {"username": username, "password": f"pw{n}"},
                    "email": f"{username}@example.com",
                }],
            })
        if str(request.url) == PRODUCTS_API_URL:
            self.product_calls += 1
            if self.fail_products:
                return httpx.Response(503, text="maintenance")
            return httpx.Response(200, json=self.catalogue)
        return httpx.Response(404)


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def database(tmp_path):
    db = Database(f"sqlite:///{tmp_path / 'test.db'}")
    db.ensure_schema()
    yield db
    db.dispose()


@pytest.fixture
def seed_service(database, upstream):
    return SeedService(
        database,
        user_client=RandomUserClient(RANDOM_USER_URL, transport=upstream.transport),
        product_client=FakeStoreClient(PRODUCTS_API_URL, transport=upstream.transport),
    )


@pytest.fixture
def make_client(database, seed_service):
    clients = []

    def _make(seed_on_startup=True, **overrides):
        settings = Settings(
            DATABASE_URL=database.url,
            RANDOM_USER_URL=RANDOM_USER_URL,
            PRODUCTS_API_URL=PRODUCTS_API_URL,
            SEED_ON_STARTUP=seed_on_startup,
            **overrides,
        )
        client = TestClient(create_app(settings, database=database, seed_service=seed_service))
        client.__enter__()
        clients.append(client)
        return client

    yield _make
    for c in clients:
        c.__exit__(None, None, None)


@pytest.fixture
def client(make_client):
    return make_client()
