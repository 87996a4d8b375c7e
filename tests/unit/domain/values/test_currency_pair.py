from monetary.domain.values import Currency, CurrencyPair


def test_pair_is_ordered():
    usd, eur = Currency.of("USD"), Currency.of("EUR")

    forward = CurrencyPair.of(usd, eur)
    backward = CurrencyPair.of(eur, usd)

    assert forward != backward
    assert forward.inverse() == backward
    assert str(forward) == "840->978"


def test_pair_equality_and_hash():
    usd, eur = Currency.of("USD"), Currency.of("EUR")

    cache = {CurrencyPair.of(usd, eur): "rate"}

    assert cache[CurrencyPair(840, 978)] == "rate"
    assert CurrencyPair.of(usd.with_symbol("US$"), eur) in cache


def test_cryptocurrency_pairs_do_not_collide():
    usd = Currency.of("USD")

    btc_usd = CurrencyPair.of(Currency.of("BTC"), usd)
    eth_usd = CurrencyPair.of(Currency.of("ETH"), usd)

    assert btc_usd != eth_usd
    assert str(btc_usd) == "BTC->840"
