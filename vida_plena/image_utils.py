import io
import logging

from PIL import Image, UnidentifiedImageError

from vida_plena.erros import ErroValidacao

logger = logging.getLogger(__name__)


def processar_foto_evento(file_stream, max_size=(1600, 1600), quality=85):
    """
    Redimensiona e comprime uma foto de evento antes do envio ao storage.

    :param file_stream: O stream de bytes do arquivo de imagem.
    :param max_size: Uma tupla (width, height) com o tamanho máximo.
    :param quality: A qualidade da compressão JPEG (0-100).
    :return: Um objeto BytesIO com a imagem processada e seu content type.
    """
    try:
        img = Image.open(file_stream)

        # Paletas (GIF) e canal alfa (PNG) não existem em JPEG
        if img.mode in ('P', 'RGBA', 'LA'):
            img = img.convert('RGB')

        img.thumbnail(max_size, Image.Resampling.LANCZOS)

        img_byte_arr = io.BytesIO()
        img.save(img_byte_arr, format='JPEG', quality=quality, optimize=True)

        # Volta o cursor para o boto3 ler desde o início
        img_byte_arr.seek(0)

        return img_byte_arr, 'image/jpeg'

    except (UnidentifiedImageError, OSError) as e:
        logger.warning("Erro ao processar imagem: %s", e)
        raise ErroValidacao("O arquivo enviado não é uma imagem válida.")
