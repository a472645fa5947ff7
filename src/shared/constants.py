from enum import Enum

# Длина экватора (км) / 360: километров в одном градусе широты
EARTH_CIRCUMFERENCE_KM = 40075.0
KM_PER_DEGREE_LAT = EARTH_CIRCUMFERENCE_KM / 360.0

# Квадрат расстояния (км²), ниже которого точка запроса считается
# совпадающей с датчиком (вес 1/d² не определён)
ZERO_DISTANCE_EPSILON = 1e-12

# Порог близости к датчику по умолчанию (км)
DEFAULT_MIN_RADIUS_KM = 1.0

# Максимальное расстояние до ближайшего датчика по умолчанию (км)
DEFAULT_MAX_DISTANCE_KM = 50.0

# Ограничение на число элементов матрицы расстояний (точки x датчики)
# в одном блоке векторизованной оценки
ESTIMATE_BLOCK_ELEMENTS = 1_000_000

# Число потоков обхода растра (None: по числу CPU)
RENDER_WORKERS: int | None = None

# Минимальное число строк в одной полосе растра
RENDER_MIN_BAND_ROWS = 8

# Ограничение на итоговое число пикселей растра
MAX_OUTPUT_PIXELS = 100_000_000

# Минимальное число опорных точек градиента
GRADIENT_MIN_STOPS = 2

# Число каналов пикселя (RGBA)
RGBA_CHANNELS = 4

# Полностью прозрачный пиксель (нет данных)
TRANSPARENT_PIXEL = (0, 0, 0, 0)

# Шкала пыли PM10 (мкг/м³): прозрачный белый → голубой → жёлтый → красный → фиолетовый
DEFAULT_PALETTE: list[tuple[float, tuple[int, int, int, int]]] = [
    (0.0, (0xFF, 0xFF, 0xFF, 0x00)),
    (25.0, (0x00, 0xFF, 0xFF, 0xC0)),
    (50.0, (0xFF, 0xFF, 0x00, 0xC0)),
    (100.0, (0xFF, 0x00, 0x00, 0xC0)),
    (200.0, (0xFF, 0x00, 0xFF, 0xC0)),
]

# --- Подготовка выборки датчиков
# Значения выше порога считаются неисправностью датчика
DEFAULT_MAX_SENSOR_VALUE = 500.0

# Во сколько раз область отбора датчиков шире области рендеринга (по стороне):
# полрегиона за каждым краем
BOUNDING_BOX_MARGIN_FACTOR = 2.0


class SensorItem(str, Enum):
    """Измеряемая величина в телеметрии датчиков пыли."""

    P1 = 'P1'  # PM10
    P2 = 'P2'  # PM2.5


def default_sensor_item() -> SensorItem:
    return SensorItem.P1


# --- Профили заданий
JOBS_DIR = 'configs/jobs'
APP_DIR_NAME = 'LuftMapper'

# --- Логирование
LOG_FILE_NAME = 'luftmapper.log'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

