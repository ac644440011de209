import pytest

import des
import main

SECRET = "133457799BBCDFF1"


def test_encrypt_then_decrypt(capsys):
    assert main.main(["encrypt", "--secret", SECRET, "--input", "attack at dawn"]) == 0
    cipher_hex = capsys.readouterr().out.strip()
    assert len(cipher_hex) == 32

    assert main.main(["decrypt", "--secret", SECRET, "--input", cipher_hex]) == 0
    assert capsys.readouterr().out.strip() == "attack at dawn"


def test_encrypt_output_is_hex_blocks(capsys):
    main.main(["encrypt", "-s", SECRET, "-i", ""])
    # Empty input is one full padding block
    assert capsys.readouterr().out.strip() == f"{des.encipher(0x0808080808080808, int(SECRET, 16)):016x}"


def test_keys_command(capsys):
    assert main.main(["keys", "--secret", SECRET]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 16
    assert lines[0] == "K1  1b02effc7072"
    assert lines[15] == "K16 cb3d8b0e17f5"


@pytest.mark.parametrize("secret", ["1234", "133457799BBCDFFZ", "0x3457799BBCDFF1"])
def test_bad_secret_exits(secret):
    with pytest.raises(SystemExit) as e:
        main.main(["encrypt", "--secret", secret, "--input", "x"])
    assert e.value.code == 2


@pytest.mark.parametrize("cipher_hex", ["abc", "zz" * 8, ""])
def test_bad_ciphertext_exits(cipher_hex):
    with pytest.raises(SystemExit) as e:
        main.main(["decrypt", "--secret", SECRET, "--input", cipher_hex])
    assert e.value.code == 2


def test_invalid_padding_returns_error(capsys, caplog):
    cipher = des.encipher(0x4142434445464700, int(SECRET, 16))
    assert main.main(["decrypt", "--secret", SECRET, "--input", f"{cipher:016x}"]) == 1
    assert capsys.readouterr().out == ""
    assert "Decryption failed" in caplog.text


def test_parse_cipher_hex_ignores_whitespace():
    assert main.parse_cipher_hex("01234567 89abcdef\n") == [0x0123456789ABCDEF]
