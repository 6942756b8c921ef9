# portfolioapi

A small HTTP API, built on Flask, that serves the product portfolio of each
customer. Portfolios are stored in MongoDB; each requested page is cached in
Redis for 24 hours. A separate endpoint loads a JSON seed file into an empty
collection.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Configuration

Settings are read from environment variables. At start-up a `.env` file is
loaded if one is found; if none is, the message `Error loading .env file` is
printed and start-up continues.

| Variable            | Meaning                                                        |
|---------------------|----------------------------------------------------------------|
| `PORT`              | Port the server listens on, on all interfaces (unset: port 0)  |
| `MONGO_DB_HOST`     | MongoDB host                                                   |
| `MONGO_DB_PORT`     | MongoDB port                                                   |
| `MONGO_DB_DATABASE` | Database name                                                  |
| `REDIS_HOST`        | Redis host (default `localhost`; port 6379, database 1)        |
| `FILE_PATH`         | Seed file (default `data/portfolios.clients-portfolios.json`)  |

MongoDB and Redis are each reached through one shared client, opened and
pinged on first use. A failed ping raises `ConnectionError`.

## Running

```
portfolioapi
```

The command takes no options. Before serving, it flushes every Redis database
and starts a background thread that flushes them again every day at 01:30
local time.

## Endpoints

Every response is JSON. Cross-origin requests are allowed from any origin for
`GET` and `POST`; `OPTIONS` preflight requests answer 204.

### `GET /health`

```json
{"code": 200, "message": "API is healthy",
 "data": {"status": "UP", "current_time": "2024-01-31 12:00:00"}}
```

### `GET /seed`

Loads the seed file into the `clients-portfolios` collection and creates two
indexes, `portfolio_search_index` (text) and `portfolio_order_index`.

- 200 `Seed executed` on success.
- 400 `Seed already executed` when the collection already holds a document.
- 500 `Seed not executed` when the file holds no items, an item's id is not a
  valid ObjectId, or the insert fails.
- 500 `Internal server error`, with the message under `error`, for any other
  failure (unreadable file, malformed JSON, index creation).

The seed file is a JSON array of documents in MongoDB extended-JSON export
form: `_id` as `{"$oid": ...}`, `createdDate` as
`{"$date": "YYYY-MM-DDTHH:MM:SS.mmmZ"}`, `unitsPerBox`, `minOrderUnits` and
`orderReasonRedeem` as strings, and `price` as
`{"fullPrice": <integer>, "taxes": [{"taxId", "taxType", "rate"}]}`.

### `POST /v1/user/portfolio/<consumerId>`

Returns one page of a customer's portfolio. `consumerId` must be 24 hex
digits or a UUID. The JSON body accepts:

| Field          | Rule                                                        |
|----------------|-------------------------------------------------------------|
| `current_page` | required, integer greater than zero                         |
| `page_size`    | required, integer greater than zero                         |
| `search`       | optional, 3 to 100 characters; full-text search             |
| `sort_type`    | optional, `asc` or `desc` (default `desc`)                  |
| `sort_by`      | optional, 5 to 16 characters                                |

`sort_by` selects a stored field for `create_at`, `title`, `brand`, `price`,
`points` and `min_order_units`; other values, including the default
`created_at`, name no stored field.

A successful answer:

```json
{
  "code": "200",
  "message": "Success",
  "data": [ { "id": "...", "title": "...", "price": 0.0, "taxes": [], "...": "..." } ],
  "pagination": {"current_page": 1, "page_size": 10, "hast_next": false,
                 "has_previous": false, "total_items": 3}
}
```

`price` in each item is the full price with each tax rate applied in turn.
Every item lists the taxes of the first item on the page. A customer with no
matching items answers 404; invalid parameters and any other failure answer
500, with the message under `error`.

## Using it from Python

- `portfolioapi.app.create_app(db, redis_client)` builds the Flask application
  from an object with a `connection()` method returning a MongoDB database
  (such as `portfolioapi.connections.MongoConnection`) and a Redis client.
  `build_seed_controller` and `build_portfolio_controller` assemble the
  controllers alone; `register_health_routes`, `register_seed_routes` and
  `register_portfolio_routes` attach them to any Flask app.
- `portfolioapi.controllers` holds `HealthController`, `RunSeedController`
  and `GetAllPortfoliosOfUserController`, which return `(payload, status)`
  pairs without needing a web framework.
- `portfolioapi.entities` (`Portfolio`, `Tax`, `PortfolioEntityParams`),
  `portfolioapi.validation` (chainable validators raising `ValidationError`)
  and `portfolioapi.pagination` (`PaginationService`) need no database.
- `portfolioapi.ports` defines the abstract interfaces; the services in
  `portfolioapi.portfolio_services`, `portfolioapi.seed_services` and
  `portfolioapi.manager_cache_service`, and the use cases in
  `portfolioapi.use_cases`, work over any implementation of them.
- `portfolioapi.cache_repository.RedisManagerCacheRepository` stores JSON in
  Redis and raises `CacheMissError` on a miss.

## What it does not do

There is no authentication, no endpoint for creating, changing or deleting
portfolio items other than the one-time seed, and no command-line options:
every setting comes from the environment.