"""
Provider api-football.com (api-sports v3).

Contiene:
- parameters: varianti dei parametri di query e ClubInfo
- envelope / fixtures_data / teams_data: modello della risposta JSON
- client: FootballApi (una GET con requests, nessun retry)
- exceptions: gerarchia degli errori
"""
