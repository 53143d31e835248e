"""Integration tests for the HTTP routes."""

from fastapi import status


class TestGenerateRoute:
    """Tests for POST /uuid/{type}."""

    async def test_generate(self, client):
        """Generation returns 201 and the identifier fields."""
        response = await client.post("/uuid/1")
        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert set(body) == {"uuid", "shard", "sec", "msec", "seq"}
        assert body["shard"] == 0
        assert body["seq"] == 0

    async def test_type_out_of_range(self, client):
        """Type 1024 is rejected with 422."""
        response = await client.post("/uuid/1024")
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    async def test_store_unavailable(self, client, redis_server):
        """A down store yields 503."""
        redis_server.connected = False
        response = await client.post("/uuid/1")
        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE


class TestParseRoute:
    """Tests for GET /uuid/{token}."""

    async def test_parse_generated(self, client):
        """A generated token parses back to its fields."""
        generated = (await client.post("/uuid/9")).json()
        response = await client.get(f"/uuid/{generated['uuid']}")
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "type": 9,
            "shard": generated["shard"],
            "sec": generated["sec"],
            "msec": generated["msec"],
            "seq": generated["seq"],
        }

    async def test_malformed_token(self, client):
        """Tokens that do not decode yield 400."""
        response = await client.get("/uuid/A")
        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestResetRoute:
    """Tests for DELETE /seq/{type}/{shard}."""

    async def test_reset(self, client):
        """Reset returns 204 and restarts the sequence."""
        await client.post("/uuid/1")
        await client.post("/uuid/1")
        response = await client.delete("/seq/1/0")
        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert (await client.post("/uuid/1")).json()["seq"] == 0

    async def test_reset_out_of_range(self, client):
        """Out-of-range shards are rejected with 422."""
        response = await client.delete("/seq/1/1024")
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
