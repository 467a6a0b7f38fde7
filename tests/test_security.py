# =============================================================================
# tests/test_security.py - Password Hashing Tests
# =============================================================================

from lib.security import hash_password, pwd_context, verify_password


class TestPasswordHashing:

    def test_round_trip(self):
        stored = hash_password("correct horse")

        assert verify_password("correct horse", stored)
        assert not verify_password("wrong horse", stored)

    def test_bcrypt_scheme(self):
        assert pwd_context.identify(hash_password("pw")) == "bcrypt"

    def test_salted(self):
        assert hash_password("same") != hash_password("same")

    def test_plaintext_not_in_hash(self):
        assert "battery" not in hash_password("battery")

    def test_malformed_stored_value(self):
        assert not verify_password("x", "plaintext")
        assert not verify_password("x", "md5$1$salt$abc")
        assert not verify_password("x", "")
