import enum


class StockStatus(str, enum.Enum):
    # "Overstock" is a dashboard statistic only and never a stored status
    in_stock = "In Stock"
    low_stock = "Low Stock"
    critical = "Critical"
