from metaclub.services.pricing import calculate_price, member_price


def test_member_price_base_roles():
    assert member_price("Developer") == 170
    assert member_price("Attacker") == 170


def test_member_price_both_is_double():
    assert member_price("Both") == 340
    assert member_price("Both", base_price=100) == 200


def test_duo_of_developers():
    members = [{"role": "Developer"}, {"role": "Developer"}]
    assert calculate_price("Duo", members) == 340


def test_solo_both_costs_the_same_as_two_developers():
    solo = calculate_price("Solo", [{"role": "Both"}])
    duo = calculate_price("Duo", [{"role": "Developer"}, {"role": "Attacker"}])
    assert solo == 340
    assert solo == duo


def test_squad_mixed_roles():
    members = [
        {"role": "Developer"},
        {"role": "Attacker"},
        {"role": "Both"},
        {"role": "Both"},
    ]
    # 170 + 170 + 340 + 340
    assert calculate_price("Squad", members) == 1020


def test_client_supplied_totals_are_ignored():
    members = [{"role": "Developer", "amount": 1, "total": 1}]
    assert calculate_price("Solo", members) == 170
