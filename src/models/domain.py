import enum


class ViewMode(str, enum.Enum):
    PRODUCER = "producer"
    COMMERCE = "commerce"


class ProducerSortKey(str, enum.Enum):
    RECENT = "recent"
    NAME = "name"
    COMMERCES = "commerces"
    REGION = "region"
    DEPARTMENT = "department"
    RATING_DESC = "rating_desc"
    RATING_ASC = "rating_asc"


class CommerceSortKey(str, enum.Enum):
    NAME = "name"
    PRODUCER = "producer"
    REGION = "region"
    DEPARTMENT = "department"
    RATING_DESC = "rating_desc"
    RATING_ASC = "rating_asc"


class EvaluationSortKey(str, enum.Enum):
    RATED_DESC = "rated_desc"
    RATED_ASC = "rated_asc"
    RATING_DESC = "rating_desc"
    RATING_ASC = "rating_asc"


DEFAULT_SORT_KEYS = {
    ViewMode.PRODUCER: ProducerSortKey.RECENT,
    ViewMode.COMMERCE: CommerceSortKey.NAME,
}

PRODUCER_SORT_LABELS = {
    ProducerSortKey.RECENT: "Plus récents",
    ProducerSortKey.NAME: "Nom (A → Z)",
    ProducerSortKey.COMMERCES: "Nb. de commerces",
    ProducerSortKey.REGION: "Région (A → Z)",
    ProducerSortKey.DEPARTMENT: "Département (A → Z)",
    ProducerSortKey.RATING_DESC: "Note (haute → basse)",
    ProducerSortKey.RATING_ASC: "Note (basse → haute)",
}

COMMERCE_SORT_LABELS = {
    CommerceSortKey.NAME: "Nom du commerce (A → Z)",
    CommerceSortKey.PRODUCER: "Producteur (A → Z)",
    CommerceSortKey.REGION: "Région (A → Z)",
    CommerceSortKey.DEPARTMENT: "Département (A → Z)",
    CommerceSortKey.RATING_DESC: "Note (haute → basse)",
    CommerceSortKey.RATING_ASC: "Note (basse → haute)",
}

EVALUATION_SORT_LABELS = {
    EvaluationSortKey.RATED_DESC: "Plus récentes",
    EvaluationSortKey.RATED_ASC: "Plus anciennes",
    EvaluationSortKey.RATING_DESC: "Note (haute → basse)",
    EvaluationSortKey.RATING_ASC: "Note (basse → haute)",
}
