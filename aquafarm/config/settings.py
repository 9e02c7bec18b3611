# configurações globais do núcleo de produção aquícola

# faixa ótima de pH (independente da espécie)
PH_OPTIMAL_RANGE = (7.0, 8.5)

# equilíbrio NH4+/NH3: pKa = A + B / (T + 273)
AMMONIA_PKA = {
    'a': 0.09018,
    'b': 2729.92,
}

# degraus fixos dos fatores de segurança da ração
FEEDING_THRESHOLDS = {
    'oxygen_hard_step': 4.0,     # mg/L; abaixo disso fator 0.75
    'nh3_hard_step': 0.05,       # mg/L; acima disso fator 0.5
    'default_meals_per_day': 2,
}

# troca de água recomendada por NH3 (limiar, fração do volume)
WATER_EXCHANGE_TIERS = [
    (0.1, 0.5),
    (0.05, 0.3),
    (0.02, 0.2),
]
WATER_EXCHANGE_ROUTINE = 0.1

# avaliação de desempenho
SGR_RATING_THRESHOLDS = {
    'excellent': 3.0,
    'good': 2.0,
    'acceptable': 1.0,
}
FCR_ACCEPTABLE_MARGIN = 1.2      # ACCEPTABLE até 1.2 x fcr_max
FCR_REDUCE_FEEDING = 2.5
OVERALL_RATING_CUTOFFS = {
    'excellent': 3.5,
    'good': 2.5,
    'acceptable': 1.5,
}

# estimador de tendência de crescimento
GROWTH_TREND_MIN_POINTS = 2
