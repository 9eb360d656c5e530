"""
Integration tests for the Flask CLI commands.
"""


def test_init_db(app):
    result = app.test_cli_runner().invoke(args=['init-db'])
    assert result.exit_code == 0
    assert 'Tablas creadas' in result.output


def test_show_promotion(app, catalog):
    runner = app.test_cli_runner()
    result = runner.invoke(args=['show-promotion', str(catalog['three_for_two']),
                                 '--quantity', '3', '--price', '100'])

    assert result.exit_code == 0
    assert 'Promoción: 3x2 monitores (3x2)' in result.output
    assert 'Importe 3 x 100: 200.00' in result.output
    assert 'Ahorro: 100.00' in result.output


def test_show_expired_promotion(app, catalog):
    result = app.test_cli_runner().invoke(args=['show-promotion', str(catalog['expired']), '--price', '80'])
    assert 'Vigente hoy: no' in result.output
    assert 'Importe 1 x 80: 40.00' in result.output


def test_show_missing_promotion(app, catalog):
    result = app.test_cli_runner().invoke(args=['show-promotion', '999', '--price', '10'])
    assert 'no encontrada' in result.output


def test_show_promotion_bad_price(app, catalog):
    result = app.test_cli_runner().invoke(args=['show-promotion', '1', '--price', 'mucho'])
    assert 'Precio inválido' in result.output


def test_show_promotion_non_finite_price(app, catalog):
    result = app.test_cli_runner().invoke(args=['show-promotion', '1', '--price', 'NaN'])
    assert result.exit_code == 0
    assert 'Precio inválido' in result.output
