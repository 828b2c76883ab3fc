"""
Tests for bcrypt password hashing.
"""

from auth.password import hash_password, verify_password


class TestPasswordHashing:
    def test_verify_roundtrip(self):
        hashed = hash_password("s3cret", rounds=4)
        assert hashed != "s3cret"
        assert verify_password("s3cret", hashed)

    def test_wrong_password(self):
        hashed = hash_password("s3cret", rounds=4)
        assert not verify_password("S3cret", hashed)

    def test_salted(self):
        assert hash_password("same", rounds=4) != hash_password("same", rounds=4)

    def test_uses_configured_cost(self):
        # fast_bcrypt fixture sets config.bcrypt_rounds = 4
        assert hash_password("pw").startswith("$2b$04$")

    def test_malformed_hash_is_a_mismatch(self):
        assert verify_password("pw", "not-a-bcrypt-hash") is False
        assert verify_password("pw", "") is False

    def test_long_password(self):
        long_pw = "x" * 100
        hashed = hash_password(long_pw, rounds=4)
        assert verify_password(long_pw, hashed)
